"""
Staking contract call decoding

Classifies raw transaction input by its 4-byte method selector and pulls
out the token id argument.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

from ..models import StakingAction

METHOD_IDS = {
    StakingAction.STAKE: "0xa422b640",
    StakingAction.UNSTAKE: "0x52b23c3d",
    StakingAction.RENT: "0x9e9c4f3e",
}

_ACTIONS_BY_SELECTOR = {selector: action for action, selector in METHOD_IDS.items()}

# "0x" plus 4 bytes
SELECTOR_LENGTH = 10

TIER_MULTIPLIERS = {1: 4, 2: 5, 3: 6}
DEFAULT_MULTIPLIER = 3

_LEADING_HEX = re.compile(r"^[0-9a-fA-F]+")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class DecodedCall:
    """A recognised staking contract call"""
    action: StakingAction
    token_id: int
    selector: str


def decode_token_id(payload: str) -> Optional[int]:
    """
    Read the call arguments as a single big-endian unsigned integer.

    Only the leading run of hex digits is used; no ABI decoding or bounds
    checks are applied. Returns None when there is nothing to read.
    """
    match = _LEADING_HEX.match(payload or "")
    if not match:
        return None
    return int(match.group(0), 16)


def decode_transaction_input(tx_input: Any) -> Optional[DecodedCall]:
    """Decode transaction input, or None if it is not a known staking call."""
    if not isinstance(tx_input, str) or len(tx_input) < SELECTOR_LENGTH:
        return None

    selector = tx_input[:SELECTOR_LENGTH]
    action = _ACTIONS_BY_SELECTOR.get(selector)
    if action is None:
        return None

    token_id = decode_token_id(tx_input[SELECTOR_LENGTH:])
    if token_id is None:
        return None

    return DecodedCall(action=action, token_id=token_id, selector=selector)


def get_multiplier_for_tier(tier: Any) -> int:
    """
    Reward multiplier for a tier: 1->4, 2->5, 3->6, anything else 3.

    Strings contribute their leading integer, so "2.0" and " 3 " resolve
    like 2 and 3.
    """
    if isinstance(tier, str):
        match = _LEADING_INT.match(tier)
        if not match:
            return DEFAULT_MULTIPLIER
        tier = match.group(1)
    try:
        tier_value = int(tier)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_MULTIPLIER
    return TIER_MULTIPLIERS.get(tier_value, DEFAULT_MULTIPLIER)
