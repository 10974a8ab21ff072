"""Statistics — read-only view of the process-wide invocation counters.

Invariants:
    - Counters are never modified from here
    - /businesscard exposes the three business card counters by operation name
"""

from fastapi import APIRouter

from smp_directory.core.statistics import all_counters
from smp_directory.services import business_card_api

router = APIRouter(prefix="/api/v1/statistics", tags=["statistics"])


@router.get("")
async def list_statistics():
    """All keyed counters, by counter name."""
    return {"counters": all_counters()}


@router.get("/businesscard")
async def business_card_statistics():
    """Invocation/success/error counts of the business card API."""
    return {
        "invocations": business_card_api.invocation_counter.snapshot(),
        "successes": business_card_api.success_counter.snapshot(),
        "errors": business_card_api.error_counter.snapshot(),
    }
