"""
FastAPI endpoints for Target Operating Model phases
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.dependencies import get_config_store, handle_api_errors
from d0_metadata.store import ConfigStore

from .phases import TomConfig, derive_phase, merge_preset_profile

router = APIRouter()


class DerivePhaseRequest(BaseModel):
    use_case_status: Optional[str] = None
    deployment_status: Optional[str] = None
    tom_phase_override: Optional[str] = None
    config: Optional[TomConfig] = None


class DerivedPhaseResponse(BaseModel):
    id: str
    name: str
    color: str
    is_override: bool
    matched_by: str


@router.post("/derive-phase", response_model=DerivedPhaseResponse)
@handle_api_errors("operating_model")
async def derive(request: DerivePhaseRequest, store: ConfigStore = Depends(get_config_store)):
    """Derive the phase under the active preset"""
    config = request.config if request.config is not None else store.load_tom_config()
    result = derive_phase(
        request.use_case_status,
        request.deployment_status,
        request.tom_phase_override,
        merge_preset_profile(config),
    )
    return DerivedPhaseResponse(**result.to_dict())


@router.get("/phases")
@handle_api_errors("operating_model")
async def list_phases(store: ConfigStore = Depends(get_config_store)):
    """Phases with the active preset's gates and durations applied"""
    config = merge_preset_profile(store.load_tom_config())
    profile = config.active_profile()
    return {
        "enabled": config.enabled,
        "active_preset": config.active_preset,
        "phases": [phase.model_dump() for phase in sorted(config.phases, key=lambda p: p.order)],
        "staffing_ratios": {k: v.model_dump() for k, v in profile.staffing_ratios.items()} if profile else {},
        "delivery_tracks": [t.model_dump() for t in profile.delivery_tracks] if profile else [],
    }
