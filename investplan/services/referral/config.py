"""
Referral commission configuration.

Rates come from the GlobalSettings row and are passed explicitly into each
operation.
"""

from dataclasses import dataclass
from decimal import Decimal

from investplan.models.global_settings import GlobalSettings
from investplan.utils.exceptions import ConfigurationMissingError


@dataclass(frozen=True)
class CommissionRates:
    """Commission percentages (e.g. Decimal("10") = 10%)."""

    referral_commission_rate: Decimal
    daily_commission_rate: Decimal

    @classmethod
    def from_settings(cls, global_settings: GlobalSettings | None) -> "CommissionRates":
        """
        Build rates from the settings row.

        Raises:
            ConfigurationMissingError: If the row is absent
        """
        if global_settings is None:
            raise ConfigurationMissingError("System settings not found.")

        return cls(
            referral_commission_rate=Decimal(
                global_settings.referral_commission_rate or 0
            ),
            daily_commission_rate=Decimal(
                global_settings.daily_commission_rate or 0
            ),
        )
