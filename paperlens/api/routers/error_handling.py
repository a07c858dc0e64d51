"""
Conversation error handling utilities.

Decorator mapping domain exceptions to HTTPExceptions for consistent error
responses across session and chat endpoints.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from paperlens.core.exceptions import (
    ConversationBusyError,
    DocumentNotIndexedError,
    PaperLensException,
    SessionNotFoundError,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def handle_conversation_errors(func: F) -> F:
    """
    Transform domain errors raised by an endpoint into HTTPExceptions.

    Mapping:
    - SessionNotFoundError -> 404
    - ConversationBusyError -> 409
    - DocumentNotIndexedError, ValueError -> 400
    - other PaperLensException -> 500
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except SessionNotFoundError as e:
            logger.warning(f"{__name__}:{func.__name__} - {e}")
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

        except ConversationBusyError as e:
            logger.warning(f"{__name__}:{func.__name__} - {e}")
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)

        except DocumentNotIndexedError as e:
            logger.warning(f"{__name__}:{func.__name__} - {e}")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

        except ValueError as e:
            logger.warning(f"{__name__}:{func.__name__} - Invalid request: {e}")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        except PaperLensException as e:
            logger.error(f"{__name__}:{func.__name__} - {type(e).__name__}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=e.message,
            )

    return wrapper  # type: ignore[return-value]
