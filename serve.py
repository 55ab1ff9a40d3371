"""Run the GreenConstructHub API with uvicorn."""
import uvicorn

from greenconstructhub.api.app import create_app
from greenconstructhub.config import load_config

app = create_app(use_lifespan=True)


if __name__ == "__main__":
    config = load_config()
    uvicorn.run(app, host=config.host, port=config.port)
