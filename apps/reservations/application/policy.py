"""Reservation policy: the business constants of the lifecycle, all overridable."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import timedelta
import string

# No 0/O or 1/I, the code is read out over the phone
DEFAULT_CODE_ALPHABET = ''.join(
    ch for ch in string.ascii_uppercase + string.digits if ch not in '0O1I'
)

# Width of the confirmation_code column
MAX_CODE_LENGTH = 16


@dataclass(frozen=True)
class ReservationPolicy:
    freeze_duration: timedelta = timedelta(hours=24)
    max_guests: int = 2
    min_guest_name_length: int = 2
    code_length: int = 8
    code_alphabet: str = DEFAULT_CODE_ALPHABET
    max_code_attempts: int = 10
    add_on_surcharge: int = 0
    deposit_percent: int = 50
    currency: str = 'COP'
    account_holder: str = ''
    bank_name: str = ''
    account_number: str = ''
    contact_phone: str = ''
    allow_past_check_in: bool = False

    def __post_init__(self):
        if not 4 <= self.code_length <= MAX_CODE_LENGTH:
            raise ValueError(f"Confirmation codes need 4 to {MAX_CODE_LENGTH} characters")
        if len(set(self.code_alphabet)) < 2:
            raise ValueError("Confirmation code alphabet is too small")
        if self.max_guests < 1:
            raise ValueError("max_guests must be at least 1")
        if not 0 <= self.deposit_percent <= 100:
            raise ValueError("deposit_percent must be between 0 and 100")

    @classmethod
    def from_settings(cls, overrides: dict | None = None) -> 'ReservationPolicy':
        """
        Build the policy from the RESERVATIONS setting

        Keys are the upper-case field names; FREEZE_HOURS is accepted in
        place of a timedelta. Unknown keys are ignored.
        """
        from django.conf import settings

        config = dict(getattr(settings, 'RESERVATIONS', {}))
        if overrides:
            config.update(overrides)

        known = {f.name for f in fields(cls)}
        kwargs = {
            key.lower(): value for key, value in config.items()
            if key.lower() in known
        }
        if 'FREEZE_HOURS' in config:
            kwargs['freeze_duration'] = timedelta(hours=float(config['FREEZE_HOURS']))
        return cls(**kwargs)

    def deposit_for(self, total_price: int) -> int:
        # Half-up rounding on whole currency units
        return (total_price * self.deposit_percent + 50) // 100

    def payment_instructions(self, total_price: int, confirmation_code: str) -> str:
        """Manual transfer instructions stored with a new reservation"""
        freeze_hours = int(self.freeze_duration.total_seconds() // 3600)
        lines = [
            f"Deposit ({self.deposit_percent}%): ${self.deposit_for(total_price):,} {self.currency}",
            f"Total: ${total_price:,} {self.currency}",
        ]
        if self.account_holder:
            lines.append(f"Account holder: {self.account_holder}")
        if self.bank_name:
            lines.append(f"Bank: {self.bank_name}")
        if self.account_number:
            lines.append(f"Account number: {self.account_number}")
        lines.append(f"Reference: {confirmation_code}")
        lines.append(
            f"Your dates are held for {freeze_hours} hours. Send the transfer receipt"
            + (f" to {self.contact_phone}" if self.contact_phone else "")
            + " to confirm the reservation."
        )
        return "\n".join(lines)
