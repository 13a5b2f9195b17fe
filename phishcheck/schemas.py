from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any

from phishcheck.core.list_resolver import ListMutation
from phishcheck.core.risk_scorer import Weights

# ==========================================
# 📥 INPUT MODELS
# ==========================================

class TextSubmission(BaseModel):
    text: str = ""

class DomainRequest(BaseModel):
    domain: str = Field(..., min_length=1, max_length=253)

class WeightsPayload(BaseModel):
    """Weight table as edited in the UI; each weight is bounded to [1, 25]"""
    text: float = Field(5, ge=1, le=25)
    urlSevere: float = Field(15, ge=1, le=25)
    urlMedium: float = Field(10, ge=1, le=25)
    urlMild: float = Field(6, ge=1, le=25)

    def to_weights(self) -> Weights:
        return Weights(
            text=self.text,
            url_severe=self.urlSevere,
            url_medium=self.urlMedium,
            url_mild=self.urlMild
        )

# ==========================================
# 📤 RESPONSE MODELS
# ==========================================

class RiskResponse(BaseModel):
    tier: str
    label: str
    hint: str

class SignalResponse(BaseModel):
    kind: str
    severity: str
    detail: Dict[str, Any] = {}
    message: str

class UrlRecordResponse(BaseModel):
    raw: str
    ok: bool
    url: Optional[str] = None
    host: Optional[str] = None
    base_domain: Optional[str] = None
    tld: Optional[str] = None
    flags: List[str] = []
    signals: List[SignalResponse] = []
    error: Optional[str] = None
    score: int
    category: str

class AnalysisResponse(BaseModel):
    score: int
    risk: RiskResponse
    text_findings: List[str]
    text_signals: List[SignalResponse]
    urls: List[UrlRecordResponse]
    url_count: int
    weights: Dict[str, float]
    processing_time: float

class ExtractResponse(BaseModel):
    urls: List[str]

class ListsResponse(BaseModel):
    allow: List[str]
    deny: List[str]

class ListMutationResponse(BaseModel):
    applied: bool
    domain: str
    list_name: str
    reason: Optional[str] = None
    conflict: bool = False

    @classmethod
    def from_mutation(cls, mutation: ListMutation) -> "ListMutationResponse":
        return cls(
            applied=mutation.applied,
            domain=mutation.domain,
            list_name=mutation.list_name,
            reason=mutation.reason,
            conflict=mutation.conflict
        )

class BulkListMutationResponse(BaseModel):
    list_name: str
    applied: List[str]
    rejected: List[ListMutationResponse]
