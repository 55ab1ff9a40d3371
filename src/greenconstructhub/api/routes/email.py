"""Transactional email proxy."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from greenconstructhub.api.deps import get_email_sender
from greenconstructhub.notify.email import EmailDeliveryError, EmailSender

router = APIRouter()


class SendEmailRequest(BaseModel):
    to: str | list[str]
    subject: str
    html: str


@router.post("/send-email")
async def send_email(
    body: SendEmailRequest,
    sender: EmailSender = Depends(get_email_sender),
) -> JSONResponse:
    try:
        data = await sender.send(body.to, body.subject, body.html)
    except EmailDeliveryError as e:
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": {"message": str(e), "detail": e.detail}},
        )
    return JSONResponse(status_code=200, content={"success": True, "data": data})


@router.api_route("/send-email", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def send_email_wrong_method() -> JSONResponse:
    return JSONResponse(status_code=405, content={"error": "Method not allowed"})
