from greenconstructhub.inference.gateway import (
    GenerationConfig,
    InferenceError,
    InferenceGateway,
    InferenceResponse,
    ProviderConfig,
    TransportError,
)

__all__ = [
    "GenerationConfig",
    "InferenceError",
    "InferenceGateway",
    "InferenceResponse",
    "ProviderConfig",
    "TransportError",
]
