from pydantic import BaseModel, ConfigDict, Field


class UsageStats(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    credits_remaining: int = Field(ge=0, alias="creditsRemaining")
    analyses_today: int = Field(ge=0, alias="analysesToday")

    def after_analysis(self) -> "UsageStats":
        return UsageStats(
            credits_remaining=max(self.credits_remaining - 1, 0),
            analyses_today=self.analyses_today + 1,
        )
