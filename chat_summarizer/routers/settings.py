from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from chat_summarizer.core.security import SECRET_KEYS, mask_secret
from chat_summarizer.db.session import get_db
from chat_summarizer.schemas.settings import ConfigRead, ConfigUpdate, ProviderPayload
from chat_summarizer.services.config_store import ConfigStore

router = APIRouter(prefix="/settings", tags=["settings"])


def _masked(config: dict[str, str]) -> dict[str, str]:
    return {key: mask_secret(value) if key in SECRET_KEYS else value for key, value in config.items()}


@router.get("", response_model=ConfigRead)
def read_settings(db: Session = Depends(get_db)) -> ConfigRead:
    store = ConfigStore(db)
    return ConfigRead(provider=store.get_provider(), config=_masked(store.get_config()))


@router.put("", response_model=ConfigRead)
def update_settings(payload: ConfigUpdate, db: Session = Depends(get_db)) -> ConfigRead:
    store = ConfigStore(db)
    merged = store.save_config(payload.updates())
    return ConfigRead(provider=store.get_provider(), config=_masked(merged))


@router.get("/provider", response_model=ProviderPayload)
def read_provider(db: Session = Depends(get_db)) -> ProviderPayload:
    return ProviderPayload(provider=ConfigStore(db).get_provider())


@router.put("/provider", response_model=ProviderPayload)
def update_provider(payload: ProviderPayload, db: Session = Depends(get_db)) -> ProviderPayload:
    store = ConfigStore(db)
    try:
        store.set_provider(payload.provider)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ProviderPayload(provider=store.get_provider())
