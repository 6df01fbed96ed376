"""Staking registrar and voter state, lockup rules, events and rewards instructions."""

__version__ = "0.1.0"

__all__ = [
    "deposit_entry",
    "errors",
    "events",
    "lockup",
    "operations",
    "pubkey",
    "registrar",
    "rewards",
    "voter",
    "voting_mint_config",
]