import logging
import sys
import time

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from private_notes.config import Settings
from private_notes.storage.session_store import SessionStore

# Load .env into os.environ, then fail fast if the platform is not configured
load_dotenv()
settings = Settings.from_env()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s [%(name)s:%(levelname)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("private_notes")

from private_notes.api.auth import router as auth_router  # noqa: E402
from private_notes.api.notes import router as notes_router  # noqa: E402
from private_notes.web.pages import router as pages_router  # noqa: E402

app = FastAPI(title="Private Notes")
app.state.settings = settings
app.state.session_store = SessionStore(settings.data_dir)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    session_cookie="private_notes_session",
    same_site="lax",
    https_only=settings.site_url.startswith("https://"),
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    logger.info(
        "%s %s -> %s in %.3fs",
        request.method,
        request.url.path,
        response.status_code,
        time.time() - start_time,
    )
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Validation error for %s: %r", request.url.path, exc.errors())
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})


app.include_router(auth_router)
app.include_router(notes_router)
app.include_router(pages_router)


@app.get("/health")
def health():
    return {"ok": True}


def run():
    import uvicorn

    uvicorn.run("private_notes.main:app", host="0.0.0.0", port=8000)
