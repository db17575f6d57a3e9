from pydantic import BaseModel, ConfigDict, Field


class UserStat(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    post_count: int = Field(ge=0)
    last_post_title: str = ""
