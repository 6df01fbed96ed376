"""Lockup schedules and their reward multipliers."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

from .errors import StakingError, StakingErrorCode

SECONDS_PER_DAY = 86_400
COOLDOWN_SECS = SECONDS_PER_DAY * 5

_U64_MAX = 2**64 - 1
_LOCKUP_FORMAT = struct.Struct("<QQQ?BB16x5x")
LOCKUP_SIZE = _LOCKUP_FORMAT.size


class LockupPeriod(IntEnum):
    """Length of a lockup; ordered from shortest to longest."""

    NONE = 0
    FLEX = 1
    THREE_MONTHS = 2
    SIX_MONTHS = 3
    ONE_YEAR = 4

    def to_secs(self) -> int:
        return _PERIOD_SECS[self]

    def multiplier(self) -> int:
        return _PERIOD_MULTIPLIERS[self]


_PERIOD_SECS = {
    LockupPeriod.NONE: 0,
    LockupPeriod.FLEX: SECONDS_PER_DAY * 5,
    LockupPeriod.THREE_MONTHS: SECONDS_PER_DAY * 90,
    LockupPeriod.SIX_MONTHS: SECONDS_PER_DAY * 180,
    LockupPeriod.ONE_YEAR: SECONDS_PER_DAY * 365,
}

_PERIOD_MULTIPLIERS = {
    LockupPeriod.NONE: 0,
    LockupPeriod.FLEX: 1,
    LockupPeriod.THREE_MONTHS: 2,
    LockupPeriod.SIX_MONTHS: 4,
    LockupPeriod.ONE_YEAR: 6,
}


class LockupKind(IntEnum):
    """NONE: withdrawable at will. CONSTANT: locked until unlocked."""

    NONE = 0
    CONSTANT = 1

    def period_secs(self) -> int:
        """Length of one lockup period in seconds."""
        return SECONDS_PER_DAY if self is LockupKind.CONSTANT else 0

    def strictness(self) -> int:
        """Lockups cannot decrease in strictness."""
        return 3 if self is LockupKind.CONSTANT else 0


@dataclass
class Lockup:
    """Lockup state of a single deposit."""

    start_ts: int = 0
    end_ts: int = 0
    cooldown_ends_at: int = 0
    cooldown_requested: bool = False
    kind: LockupKind = field(default=LockupKind.CONSTANT)
    period: LockupPeriod = field(default=LockupPeriod.FLEX)

    @classmethod
    def new(cls, kind: LockupKind, start_ts: int, period: LockupPeriod) -> "Lockup":
        """Create a lockup of the given kind and period starting at start_ts."""
        valid = (kind is LockupKind.NONE and period is LockupPeriod.NONE) or (
            kind is LockupKind.CONSTANT and period is not LockupPeriod.NONE
        )
        if not valid:
            raise StakingError(StakingErrorCode.INVALID_LOCKUP_KIND)
        end_ts = start_ts + period.to_secs()
        if end_ts > _U64_MAX:
            raise StakingError(StakingErrorCode.INVALID_TIMESTAMP_ARGUMENTS)
        return cls(start_ts=start_ts, end_ts=end_ts, kind=kind, period=period)

    def expired(self, curr_ts: int) -> bool:
        return self.seconds_left(curr_ts) == 0

    def seconds_left(self, curr_ts: int) -> int:
        """Seconds until end_ts; zero for unlocked kinds or after the end."""
        if self.kind is LockupKind.NONE or curr_ts >= self.end_ts:
            return 0
        return self.end_ts - curr_ts

    def periods_left(self, curr_ts: int) -> int:
        period_secs = self.kind.period_secs()
        if period_secs == 0:
            return 0
        if curr_ts < self.start_ts:
            return self.periods_total()
        return -(-self.seconds_left(curr_ts) // period_secs)

    def period_current(self, curr_ts: int) -> int:
        return max(self.periods_total() - self.periods_left(curr_ts), 0)

    def periods_total(self) -> int:
        period_secs = self.kind.period_secs()
        if period_secs == 0:
            return 0
        lockup_secs = self.seconds_left(self.start_ts)
        if lockup_secs % period_secs != 0:
            raise StakingError(StakingErrorCode.INVALID_LOCKUP_PERIOD)
        return lockup_secs // period_secs

    def remove_past_periods(self, curr_ts: int) -> None:
        """Move start_ts past the periods already elapsed at curr_ts."""
        shift = self.period_current(curr_ts) * self.kind.period_secs()
        if shift > _U64_MAX:
            raise StakingError(StakingErrorCode.INVALID_TIMESTAMP_ARGUMENTS)
        new_start = self.start_ts + shift
        if new_start > _U64_MAX:
            raise OverflowError("lockup start timestamp overflowed")
        self.start_ts = new_start
        if self.end_ts < self.start_ts or self.period_current(curr_ts) != 0:
            raise StakingError(StakingErrorCode.INTERNAL_PROGRAM_ERROR)

    def multiplier(self, curr_ts: int) -> int:
        """Weighted-stake multiplier at curr_ts.

        Zero before the start or once cooldown is requested; the Flex
        multiplier after expiry; otherwise the period's multiplier.
        """
        if curr_ts < self.start_ts or self.cooldown_requested:
            return 0
        if self.end_ts > curr_ts:
            return self.period.multiplier()
        return LockupPeriod.FLEX.multiplier()

    def to_bytes(self) -> bytes:
        return _LOCKUP_FORMAT.pack(
            self.start_ts,
            self.end_ts,
            self.cooldown_ends_at,
            self.cooldown_requested,
            self.kind,
            self.period,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "Lockup":
        if len(data) != LOCKUP_SIZE:
            raise ValueError(f"lockup must be {LOCKUP_SIZE} bytes, got {len(data)}")
        start, end, cooldown_end, requested, kind, period = _LOCKUP_FORMAT.unpack(data)
        return cls(
            start_ts=start,
            end_ts=end,
            cooldown_ends_at=cooldown_end,
            cooldown_requested=requested,
            kind=LockupKind(kind),
            period=LockupPeriod(period),
        )