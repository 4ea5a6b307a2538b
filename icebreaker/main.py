from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.routes.process_leads import router as process_leads_router
from .errors import LeadProcessingError

ALLOWED_ORIGINS = ["*"]

app = FastAPI(title="LinkedIn Icebreaker Generator")
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(process_leads_router)


@app.exception_handler(LeadProcessingError)
async def lead_error_handler(request: Request, exc: LeadProcessingError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = [".".join(str(part) for part in err.get("loc", ())[1:]) for err in exc.errors()]
    detail = ", ".join(field for field in fields if field) or "request body"
    return JSONResponse(status_code=422, content={"error": f"Invalid request: {detail}"})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Runs outside CORSMiddleware, so the browser header is set here.
    return JSONResponse(
        status_code=500,
        content={"error": str(exc) or "Something went wrong"},
        headers={"Access-Control-Allow-Origin": ALLOWED_ORIGINS[0]},
    )


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
