"""
FastAPI application
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from config.settings import settings
from brenin.utils.logger import setup_logging, get_logger
from brenin.api.middleware import LoggingMiddleware
from brenin.api.error_handler import (
    validation_exception_handler,
    session_not_found_handler,
    invalid_input_handler,
    general_exception_handler
)
from brenin.utils.exceptions import (
    SessionNotFoundError,
    InvalidInputError
)

# Logging
setup_logging()
logger = get_logger(__name__)

app = FastAPI(
    title="Brenin Digital Human API",
    description="Chat sessions with tiered LLM, info service and keyword fallback replies",
    version="0.1.0"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(LoggingMiddleware)

# Error handlers
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(SessionNotFoundError, session_not_found_handler)
app.add_exception_handler(InvalidInputError, invalid_input_handler)
app.add_exception_handler(Exception, general_exception_handler)


@app.on_event("startup")
async def startup_event():
    """Runs on startup"""
    logger.info("Application starting")

    from brenin.services.deepseek_client import deepseek_client
    if deepseek_client.configured:
        logger.info(f"DeepSeek configured: model={deepseek_client.model}")
    else:
        logger.warning("DEEPSEEK_API_KEY not set, replies will come from fallback tiers")


@app.on_event("shutdown")
async def shutdown_event():
    """Runs on shutdown"""
    logger.info("Application stopping")

    from brenin.services.session_manager import session_manager
    session_manager.close_all()


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Brenin Digital Human API",
        "version": "0.1.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    from brenin.services.deepseek_client import deepseek_client
    from brenin.services.session_manager import session_manager

    return {
        "status": "healthy",
        "deepseek": "configured" if deepseek_client.configured else "not_configured",
        "active_sessions": len(session_manager)
    }


# Routers
from brenin.api.routers import chat, completion
app.include_router(chat.router)
app.include_router(completion.router)
