from dataclasses import dataclass

BASE_URL = "https://www.LakeBTC.com/api_v1/"


@dataclass(frozen=True)
class ExchangeSettings:
    """Static exchange metadata and client switches.

    Fees are percentages. ``verbose`` makes the client log every private call
    and the raw body it receives.
    """

    name: str = "LakeBTC"
    enabled: bool = True
    taker_fee: float = 0.2
    maker_fee: float = 0.15
    verbose: bool = False
    base_url: str = BASE_URL

    def get_fee(self, maker: bool) -> float:
        return self.maker_fee if maker else self.taker_fee


DEFAULT_SETTINGS = ExchangeSettings()

__all__ = ["BASE_URL", "DEFAULT_SETTINGS", "ExchangeSettings"]
