import logging
import os

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from outcome_map import __version__, build_outcome_map
from outcome_map.config import ParserConfig
from outcome_map.exceptions import (
    ConfigurationError,
    EmptyDatasetError,
    EmptyInputError,
    EncodingError,
    MalformedCSVError,
)
from outcome_map.schema import MapDataset, SortKey

app = FastAPI(title="outcome-map API", version=__version__)
logger = logging.getLogger(__name__)

raw_origins = os.getenv("FRONTEND_ORIGINS", "*")
allow_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}


def _validate_upload(file: UploadFile, payload: bytes) -> None:
    if not (file.filename or "").lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")
    if not payload:
        raise HTTPException(status_code=400, detail="empty file")
    if len(payload) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="file too large")


@app.post("/outcome-map", response_model=MapDataset)
async def outcome_map(
    file: UploadFile = File(...),
    encoding: str = Query(default="auto"),
    decimal_sep: str = Query(default=","),
    aggregate: bool = Query(default=True),
    agg_method: str = Query(default="average"),
    delimiter: str | None = Query(default=None),
    sort: SortKey = Query(default="input"),
) -> MapDataset:
    payload = await file.read()
    _validate_upload(file, payload)

    try:
        config = ParserConfig(
            encoding=encoding,
            decimal_sep=decimal_sep,
            aggregate=aggregate,
            agg_method=agg_method,
            delimiter=delimiter,
        )
        return build_outcome_map(payload, config=config, source_name=file.filename, sort_by=sort)
    except ConfigurationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except (EncodingError, EmptyInputError, EmptyDatasetError, MalformedCSVError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("outcome map build failed")
        raise HTTPException(status_code=500, detail="internal_error") from exc
