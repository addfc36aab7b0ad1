"""Hearthstone card search and deck-code pictures."""

from __future__ import annotations

import json
import re

SITE = "https://hs.fbigame.com"
USER_AGENT = (
    "Mozilla/5.0 (Linux; Android 6.0; Nexus 5 Build/MRA58N) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/86.0.4240.198 Mobile Safari/537.36"
)
HS = "https://hs.fbigame.com/ajax.php?"
PARA = (
    "mod=get_cards_list&"
    "mode=-1&"
    "extend=-1&"
    "mutil_extend=&"
    "hero=-1&"
    "rarity=-1&"
    "cost=-1&"
    "mutil_cost=&"
    "techlevel=-1&"
    "type=-1&"
    "collectible=-1&"
    "isbacon=-1&"
    "page=1&"
    "search_type=1&"
    "deckmode=normal"
)
CARD_IMAGE = "https://res.fbigame.com/hs/v13/{card_id}.png?auth_key={auth_key}"

_HASH_MARK = 'var hash = "'
_DECK_RE = re.compile(r"AAE[a-zA-Z0-9/+=]{70,}")


def extract_hash(page: str) -> str:
    """The page hash the site embeds in its front page."""
    _, sep, rest = page.partition(_HASH_MARK)
    if not sep:
        raise ValueError("page hash not found")
    return rest.split('"', 1)[0]


def search_url(page_hash: str, search: str) -> str:
    """The card search request URL."""
    return HS + PARA + "&hash=" + page_hash + "&search=" + search


def deck_image_url(page_hash: str, deck_code: str) -> str:
    """The deck picture request URL."""
    return (
        HS + PARA + "mod=general_deck_image&deck_code=" + deck_code
        + "&deck_text=&hash=" + page_hash + "&search=" + deck_code
    )


def find_deck_code(text: str) -> str | None:
    """The first deck code in a message, or None."""
    m = _DECK_RE.search(text)
    return m.group(0) if m else None


def card_entries(data: str | bytes, limit: int = 5) -> list[tuple[str, str]]:
    """(card id, picture URL) for the first ``limit`` cards of a search reply."""
    if not data:
        return []
    try:
        decoded = json.loads(data)
    except ValueError:
        return []
    cards = decoded.get("list") if isinstance(decoded, dict) else None
    if not isinstance(cards, list):
        return []
    entries = []
    for card in cards[:limit]:
        card = card if isinstance(card, dict) else {}
        card_id = str(card.get("CardID", "") or "")
        auth_key = str(card.get("auth_key", "") or "")
        entries.append((card_id, CARD_IMAGE.format(card_id=card_id, auth_key=auth_key)))
    return entries