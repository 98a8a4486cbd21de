from fastapi import APIRouter

from ..models import SettlementEdge
from ..schemas import ConsolidateRequest
from ..services.settlement import consolidate_settlements

router = APIRouter(prefix="/settlements", tags=["settlements"])


# POST /api/v0/settlements/consolidate
@router.post("/consolidate", response_model=list[SettlementEdge])
def consolidate(body: ConsolidateRequest) -> list[SettlementEdge]:
    return consolidate_settlements(body.settlements)
