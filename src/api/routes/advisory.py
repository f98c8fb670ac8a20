"""
AI advisory endpoints.

These always answer 200: when the LLM is down the body carries
``available: false`` and a message instead of failing the dashboard.
"""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_advisory_use_case
from src.application.dto.requests import ChatRequest, SemanticSearchRequest, SiteReportRequest
from src.application.use_cases import AdvisoryUseCase
from src.core.entities.advisory import AdvisoryResult

router = APIRouter(prefix="/api/advisory", tags=["advisory"])


@router.get("/benchmarks", response_model=AdvisoryResult)
async def kpi_benchmarks(
    use_case: AdvisoryUseCase = Depends(get_advisory_use_case),
) -> AdvisoryResult:
    """Current KPIs against industry benchmarks, with an action plan."""
    return await use_case.benchmarks()


@router.get("/analysis", response_model=AdvisoryResult)
async def inventory_analysis(
    use_case: AdvisoryUseCase = Depends(get_advisory_use_case),
) -> AdvisoryResult:
    return await use_case.analysis()


@router.post("/search", response_model=AdvisoryResult)
async def semantic_search(
    request: SemanticSearchRequest,
    use_case: AdvisoryUseCase = Depends(get_advisory_use_case),
) -> AdvisoryResult:
    """Natural-language material search restricted to catalog SKUs."""
    return await use_case.search(request)


@router.post("/site-report", response_model=AdvisoryResult)
async def parse_site_report(
    request: SiteReportRequest,
    use_case: AdvisoryUseCase = Depends(get_advisory_use_case),
) -> AdvisoryResult:
    return await use_case.site_report(request)


@router.post("/chat", response_model=AdvisoryResult)
async def chat(
    request: ChatRequest,
    use_case: AdvisoryUseCase = Depends(get_advisory_use_case),
) -> AdvisoryResult:
    """Inventory assistant grounded on the current snapshot."""
    return await use_case.chat(request)
