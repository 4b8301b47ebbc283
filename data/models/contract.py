from dataclasses import dataclass, field
from typing import Any

from data.enums import ContractType


@dataclass
class ContractPayment:
    onAccepted: int = 0
    onFulfilled: int = 0


@dataclass
class ContractDelivery:
    tradeSymbol: str
    destinationSymbol: str
    unitsRequired: int = 0
    unitsFulfilled: int = 0

    @property
    def remaining(self) -> int:
        return max(0, self.unitsRequired - self.unitsFulfilled)


@dataclass
class ContractTerms:
    deadline: str | None
    payment: ContractPayment = field(default_factory=ContractPayment)
    deliver: list[ContractDelivery] = field(default_factory=list)


@dataclass
class Contract:
    id: str
    factionSymbol: str
    type: ContractType | str
    terms: ContractTerms
    accepted: bool = False
    fulfilled: bool = False
    deadlineToAccept: str | None = None

    @property
    def is_open(self) -> bool:
        return self.accepted and not self.fulfilled

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Contract":
        type_value = d.get("type", "")
        contract_type = ContractType(type_value) if type_value in ContractType.__members__ else type_value

        terms_dict = d.get("terms", {}) or {}
        payment_dict = terms_dict.get("payment", {}) or {}
        terms = ContractTerms(
            deadline=terms_dict.get("deadline"),
            payment=ContractPayment(
                onAccepted=payment_dict.get("onAccepted", 0),
                onFulfilled=payment_dict.get("onFulfilled", 0),
            ),
            deliver=[
                ContractDelivery(
                    tradeSymbol=item.get("tradeSymbol") or "",
                    destinationSymbol=item.get("destinationSymbol") or "",
                    unitsRequired=item.get("unitsRequired", 0),
                    unitsFulfilled=item.get("unitsFulfilled", 0),
                )
                for item in terms_dict.get("deliver", []) or []
                if isinstance(item, dict)
            ],
        )

        return Contract(
            id=d.get("id") or "",
            factionSymbol=d.get("factionSymbol") or "",
            type=contract_type,
            terms=terms,
            accepted=bool(d.get("accepted", False)),
            fulfilled=bool(d.get("fulfilled", False)),
            # "expiration" is the deprecated name of the same field
            deadlineToAccept=d.get("deadlineToAccept") or d.get("expiration"),
        )
