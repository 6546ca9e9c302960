from __future__ import annotations

import re
from collections.abc import Iterable

from kubechat.core.config.settings import DEFAULT_DESTRUCTIVE_VERBS

from .schemas import Classification

_WORD_RE = re.compile(r"[a-z][a-z0-9-]*")


def classify_command(command_text: str, verbs: Iterable[str] = DEFAULT_DESTRUCTIVE_VERBS) -> Classification:
    """Flag a command as destructive when any word of it is on the verb allow-list.

    Matching is whole-word and case-insensitive: ``kubectl delete pod x``
    matches ``delete`` while ``kubectl get pods -l app=deleter`` does not.
    """
    vocabulary = {verb.strip().casefold() for verb in verbs if verb.strip()}
    words = _WORD_RE.findall(command_text.casefold())
    matched: list[str] = []
    for word in words:
        if word in vocabulary and word not in matched:
            matched.append(word)
    return Classification(is_destructive=bool(matched), matched_verbs=matched)


def is_destructive(command_text: str, verbs: Iterable[str] = DEFAULT_DESTRUCTIVE_VERBS) -> bool:
    return classify_command(command_text, verbs).is_destructive
