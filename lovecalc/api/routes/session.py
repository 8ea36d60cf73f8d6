"""Session endpoints - submit names, poll progress, try again."""

from fastapi import APIRouter, Depends, HTTPException

from lovecalc.api.deps import get_engine
from lovecalc.core.exceptions import NameValidationError
from lovecalc.core.session_engine import SessionEngine
from lovecalc.schemas.session import CalculateRequest, SessionView

router = APIRouter()


@router.get("", response_model=SessionView)
async def get_session(engine: SessionEngine = Depends(get_engine)):
    """Get the current session view."""
    return engine.view()


@router.post("/calculate", response_model=SessionView)
async def calculate(data: CalculateRequest, engine: SessionEngine = Depends(get_engine)):
    """Start a calculation. Ignored (current view returned) unless idle."""
    try:
        return engine.submit_names(data.name1, data.name2)
    except NameValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/reset", response_model=SessionView)
async def reset(engine: SessionEngine = Depends(get_engine)):
    """Clear everything and return to the input screen."""
    return engine.reset()
