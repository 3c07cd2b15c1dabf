# schoolhub/api/deps/staff.py
from fastapi import Depends, HTTPException

from schoolhub.core.context import RequestContext
from schoolhub.core.security import get_request_context


def require_staff(ctx: RequestContext = Depends(get_request_context)) -> RequestContext:
    """
    Reports are for teachers and school admins only.
    """
    if not ctx.is_staff:
        raise HTTPException(status_code=403, detail="Teachers and admins only")
    return ctx
