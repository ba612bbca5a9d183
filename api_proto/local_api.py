from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from sudsol import solve
from sudsol.config import BLOCK_COLS, BLOCK_ROWS, MAX_GRID_SIZE
from sudsol.errors import CapacityExceeded, FormatError
from sudsol.logging_utils import get_logger
from sudsol.postprocess.render_result import build_result

logger = get_logger()

app = FastAPI()


class SolveRequest(BaseModel):
    board: list[str]  # N rows of N characters ("1".."9" or ".")
    block_rows: int = Field(BLOCK_ROWS, ge=1, le=MAX_GRID_SIZE)
    block_cols: int = Field(BLOCK_COLS, ge=1, le=MAX_GRID_SIZE)


@app.post("/api/solve")
def api_solve(request: SolveRequest):
    """
    Solver API endpoint.
    Receives the board as character rows, runs the solver and returns the result dict.
    """
    try:
        result = solve(
            request.board,
            block_rows=request.block_rows,
            block_cols=request.block_cols,
        )
    except FormatError as e:
        raise HTTPException(status_code=400, detail=f"line {e.line_no}: {e}")
    except ValueError as e:
        # block_rows * block_cols が盤面サイズの上限を超えたとき
        raise HTTPException(status_code=400, detail=str(e))
    except CapacityExceeded as e:
        logger.error("%s", e)
        raise HTTPException(status_code=500, detail=str(e))
    return build_result(result)


@app.get("/api/health")
def api_health():
    return {"status": "ok"}
