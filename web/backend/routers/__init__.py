"""API route handlers."""

from .matches import router as matches_router
from .interviews import router as interviews_router
