from .main import (
    DEFAULT_MODEL,
    VALID_MODELS,
    Options,
    Translator,
    UnexpectedResponseError,
    build_messages,
    build_prompt,
    build_request,
    extract_content,
    get_error_info,
)

__all__ = [
    "DEFAULT_MODEL",
    "VALID_MODELS",
    "Options",
    "Translator",
    "UnexpectedResponseError",
    "build_messages",
    "build_prompt",
    "build_request",
    "extract_content",
    "get_error_info",
]
