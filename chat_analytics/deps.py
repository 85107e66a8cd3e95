from typing import Optional
from fastapi import Depends, HTTPException, Query, status

from .schemas.analytics import AnalyticsDocument
from .schemas.stats import AppliedRange
from .services.analytics import NO_DATA_MESSAGE, get_document
from .services.pipeline import is_bounded


def require_document(
    document: Optional[AnalyticsDocument] = Depends(get_document),
) -> AnalyticsDocument:
    """
    Dependency that provides the analytics document.
    Raises 503 with the no-data banner if it could not be loaded.
    """
    if document is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=NO_DATA_MESSAGE
        )
    return document


def date_range_params(
    start: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    end: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
) -> AppliedRange:
    """Dependency for the optional start/end day filter."""
    return AppliedRange(start=start, end=end, filtered=is_bounded(start, end))
