from email.utils import formatdate

from fastapi import Request


async def add_date_header(request: Request, call_next):
    """@brief Ensure every response carries exactly one `date` header.

    @details The server is started with its own date header disabled, so
    responses that did not set `date` themselves get the current time here.

    @param request Incoming FastAPI request object.
    @param call_next FastAPI middleware callback used to continue request handling.
    @return Response produced by downstream handlers.
    """
    response = await call_next(request)
    if "date" not in response.headers:
        response.headers["date"] = formatdate(usegmt=True)
    return response
