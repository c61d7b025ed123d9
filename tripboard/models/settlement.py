"""
Settlement Models

Output shapes of the settlement engine. These are DERIVED views and are
never written to the shared document.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Transfer(BaseModel):
    """
    One payment in a settlement plan: ``from_member`` pays ``to_member``.

    Serializes as ``{"from": ..., "to": ..., "amount": ...}``.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    from_member: str = Field(..., alias="from", min_length=1)
    to_member: str = Field(..., alias="to", min_length=1)
    amount: int = Field(..., gt=0, description="Whole yen, rounded for display")

    @model_validator(mode='after')
    def no_self_transfer(self) -> 'Transfer':
        if self.from_member == self.to_member:
            raise ValueError("A member cannot pay themself")
        return self

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class SettlementView(BaseModel):
    """
    Everything the expense panel shows, computed fresh on each render.
    """
    model_config = ConfigDict(frozen=True)

    balances: dict[str, float] = Field(default_factory=dict)
    transfers: list[Transfer] = Field(default_factory=list)
    total_spent: float = Field(default=0.0, ge=0)
    per_person: int = Field(default=0, ge=0)

    @property
    def is_settled(self) -> bool:
        """True when nobody needs to pay anybody."""
        return not self.transfers
