"""FastAPI application exposing the snapshot pipeline."""

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from seo_snapshot import __version__
from seo_snapshot.analyzer import SnapshotAnalyzer
from seo_snapshot.config import AnalysisThresholds, FetchConfig, settings
from seo_snapshot.constants import FAILURE_MESSAGE
from seo_snapshot.exceptions import AcquisitionError, BlockedError, MissingInputError

logger = logging.getLogger(__name__)

app = FastAPI(title="SEO Snapshot", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_analyzer() -> SnapshotAnalyzer:
    return SnapshotAnalyzer(
        config=FetchConfig.from_env(),
        thresholds=AnalysisThresholds.from_env(),
    )


@app.get("/health")
async def health():
    return {"status": "ok", "version": __version__}


@app.get("/snapshot")
async def snapshot(
    url: Optional[str] = Query(None, description="Page to analyze"),
    prerender: Optional[str] = Query(None, description='"1" forces the rendering proxy'),
    analyzer: SnapshotAnalyzer = Depends(get_analyzer),
):
    """Return the SEO/content profile of a page.

    Status codes: 400 when url is missing, 423 when the site is blocked by a
    bot-check or returned an error, 500 on any other failure.
    """
    try:
        profile = await analyzer.snapshot(url, force_prerender=prerender == "1")
    except MissingInputError as e:
        return JSONResponse({"error": e.message}, status_code=400)
    except BlockedError as e:
        return JSONResponse({"error": e.message}, status_code=423)
    except AcquisitionError as e:
        return JSONResponse({"error": FAILURE_MESSAGE, "detail": e.detail}, status_code=500)
    except Exception as e:
        logger.exception(f"Snapshot failed for {url}")
        return JSONResponse({"error": FAILURE_MESSAGE, "detail": str(e)}, status_code=500)

    return profile.to_dict()
