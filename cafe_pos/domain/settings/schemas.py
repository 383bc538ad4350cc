# cafe_pos/domain/settings/schemas.py
import enum

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class AppSettings(BaseModel):
    use_cloud: bool = False
    remote_endpoint: str = ""
    remote_credential: str = ""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class SaveStatus(str, enum.Enum):
    SUCCESS = "success"
    ERROR = "error"


class SettingsSaveOut(BaseModel):
    status: SaveStatus
    cloud_active: bool
    settings: AppSettings

    class Config:
        alias_generator = to_camel
        populate_by_name = True
