"""BaseService — foundation for all postctl services.

Every service receives a :class:`Corpus` at construction time and reads
or writes content exclusively through it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from postctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from postctl.infrastructure.corpus import Corpus

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class QueryService(BaseService):
            def get(self, key: str) -> ServiceResult:
                matches = self._corpus.find(key)
                ...
    """

    def __init__(self, corpus: Corpus) -> None:
        self._corpus = corpus

    @staticmethod
    def _fail(op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        """Build a failed result and log it at debug level."""
        logger.debug("%s failed (%s): %s", op, code, message)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )

    def _load_warnings(self) -> list[str]:
        """One warning per file the corpus could not decode."""
        return [f"Skipped {f.path.as_posix()}: {f.message}" for f in self._corpus.failures]
