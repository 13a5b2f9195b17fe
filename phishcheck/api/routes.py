import json
import logging
from typing import Dict, Literal, Optional

from fastapi import APIRouter, UploadFile, File, Form, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from phishcheck.config import settings
from phishcheck.database import get_db
from phishcheck.schemas import (
    AnalysisResponse, BulkListMutationResponse, DomainRequest, ExtractResponse,
    ListMutationResponse, ListsResponse, TextSubmission, WeightsPayload
)
from phishcheck.services.analysis_service import AnalysisService
from phishcheck.services.ingestion import UnsupportedUpload, combine_inputs, decode_upload
from phishcheck.services.report_service import report_filename

logger = logging.getLogger(__name__)

router = APIRouter()

ListName = Literal["allow", "deny"]
CategoryFilter = Literal["all", "trusted", "malicious", "risky", "ok"]


def get_analysis_service(db: Session = Depends(get_db)) -> AnalysisService:
    return AnalysisService(db)

# ============================================================================
# ANALYSIS ENDPOINTS
# ============================================================================

@router.post("/analyze", response_model=AnalysisResponse)
def analyze_text(
    submission: TextSubmission,
    category: Optional[CategoryFilter] = None,
    service: AnalysisService = Depends(get_analysis_service)
):
    """Analyze pasted message text and every URL inside it"""
    try:
        return service.analyze_text(submission.text, category)
    except Exception as e:
        logger.exception("Error in /analyze")
        raise HTTPException(status_code=500, detail=f"Analysis failed: {str(e)}")


@router.post("/analyze/file", response_model=AnalysisResponse)
async def analyze_file(
    file: UploadFile = File(...),
    text: str = Form(""),
    category: Optional[CategoryFilter] = None,
    service: AnalysisService = Depends(get_analysis_service)
):
    """Analyze an uploaded .txt/.eml/.html/.log file, appended to optional pasted text"""
    data = await file.read()
    if len(data) > settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024:
        raise HTTPException(status_code=413, detail="Uploaded file is too large")

    try:
        file_text = decode_upload(file.filename, data)
    except UnsupportedUpload as e:
        raise HTTPException(status_code=415, detail=str(e))

    try:
        return service.analyze_text(combine_inputs(text, file_text), category)
    except Exception as e:
        logger.exception("Error in /analyze/file")
        raise HTTPException(status_code=500, detail=f"Analysis failed: {str(e)}")


@router.post("/extract", response_model=ExtractResponse)
def extract_urls(submission: TextSubmission, service: AnalysisService = Depends(get_analysis_service)):
    return {"urls": service.extract_urls(submission.text)}

# ============================================================================
# REPORT EXPORT
# ============================================================================

@router.post("/report/json")
def export_json_report(submission: TextSubmission, service: AnalysisService = Depends(get_analysis_service)):
    report = service.json_report(submission.text)
    return Response(
        content=json.dumps(report, ensure_ascii=False, indent=2),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{report_filename("json")}"'}
    )


@router.post("/report/csv")
def export_csv_report(submission: TextSubmission, service: AnalysisService = Depends(get_analysis_service)):
    return Response(
        content=service.csv_report(submission.text),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{report_filename("csv")}"'}
    )

# ============================================================================
# WEIGHT TABLE
# ============================================================================

@router.get("/weights", response_model=Dict[str, float])
def get_weights(service: AnalysisService = Depends(get_analysis_service)):
    return service.state.snapshot().weights.to_dict()


@router.put("/weights", response_model=Dict[str, float])
def update_weights(payload: WeightsPayload, service: AnalysisService = Depends(get_analysis_service)):
    weights = service.state.set_weights(service.store, payload.to_weights())
    logger.info(f"Weights updated: {weights.to_dict()}")
    return weights.to_dict()


@router.post("/weights/reset", response_model=Dict[str, float])
def reset_weights(service: AnalysisService = Depends(get_analysis_service)):
    return service.state.reset_weights(service.store).to_dict()

# ============================================================================
# ALLOW / DENY LISTS
# ============================================================================

@router.get("/lists", response_model=ListsResponse)
def get_lists(service: AnalysisService = Depends(get_analysis_service)):
    lists = service.state.snapshot().lists
    return {"allow": sorted(lists.allow), "deny": sorted(lists.deny)}


@router.post("/lists/{list_name}", response_model=ListMutationResponse)
def add_to_list(list_name: ListName, request: DomainRequest, service: AnalysisService = Depends(get_analysis_service)):
    """Add one domain; a domain already on the other list is reported, not added"""
    mutation = service.state.add_domain(service.store, list_name, request.domain)
    return ListMutationResponse.from_mutation(mutation)


@router.delete("/lists/{list_name}/{domain}", response_model=ListMutationResponse)
def remove_from_list(list_name: ListName, domain: str, service: AnalysisService = Depends(get_analysis_service)):
    mutation = service.state.remove_domain(service.store, list_name, domain)
    if not mutation.applied:
        raise HTTPException(status_code=404, detail=f"{mutation.domain} is not on the {list_name} list")
    return ListMutationResponse.from_mutation(mutation)


@router.post("/lists/{list_name}/from-analysis", response_model=BulkListMutationResponse)
def add_analysis_domains(list_name: ListName, submission: TextSubmission, service: AnalysisService = Depends(get_analysis_service)):
    """Add every base domain found in the text to one list"""
    results = service.add_domains_from_analysis(submission.text, list_name)
    return {
        "list_name": list_name,
        "applied": [r.domain for r in results if r.applied],
        "rejected": [ListMutationResponse.from_mutation(r) for r in results if not r.applied]
    }


@router.get("/health")
def health_check():
    return {"status": "ok", "version": settings.VERSION}
