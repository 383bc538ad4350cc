# cafe_pos/api/v1/routes_settings.py
from fastapi import APIRouter, Depends

from cafe_pos.api.deps import get_pos
from cafe_pos.domain.session.service import PosSession
from cafe_pos.domain.settings.schemas import AppSettings, SettingsSaveOut


router = APIRouter(prefix="/api/v1/settings", tags=["settings"])


@router.get("", response_model=AppSettings)
async def get_settings_endpoint(pos: PosSession = Depends(get_pos)):
    return pos.policy.settings


@router.put("", response_model=SettingsSaveOut)
async def save_settings_endpoint(
    payload: AppSettings,
    pos: PosSession = Depends(get_pos),
):
    return await pos.save_settings(payload)
