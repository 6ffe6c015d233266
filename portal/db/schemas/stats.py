from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt


class MainPageStats(BaseModel):
    projectsCount: int = Field(validation_alias=AliasChoices("projectsCount", "projects_count"))
    paymentsCount: int = Field(validation_alias=AliasChoices("paymentsCount", "payments_count"))
    choiceCount: int = Field(validation_alias=AliasChoices("choiceCount", "choice_count"))
    model_config = ConfigDict(from_attributes=True)


class MainPageStatsUpdate(BaseModel):
    projectsCount: Optional[StrictInt] = Field(default=None, ge=0)
    paymentsCount: Optional[StrictInt] = Field(default=None, ge=0)
    choiceCount: Optional[StrictInt] = Field(default=None, ge=0)
