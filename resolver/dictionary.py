"""Static bidirectional ingredient dictionary."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

# Ukrainian ingredient names mapped to the English labels used by the food database.
BUILTIN_ENTRIES: Tuple[Tuple[str, str], ...] = (
    ("яблуко", "apple"),
    ("груша", "pear"),
    ("банан", "banana"),
    ("апельсин", "orange"),
    ("лимон", "lemon"),
    ("лайм", "lime"),
    ("виноград", "grapes"),
    ("полуниця", "strawberry"),
    ("малина", "raspberry"),
    ("вишня", "cherry"),
    ("слива", "plum"),
    ("персик", "peach"),
    ("абрикос", "apricot"),
    ("ананас", "pineapple"),
    ("кавун", "watermelon"),
    ("диня", "melon"),
    ("картопля", "potato"),
    ("морква", "carrot"),
    ("цибуля", "onion"),
    ("часник", "garlic"),
    ("буряк", "beetroot"),
    ("капуста", "cabbage"),
    ("помідор", "tomato"),
    ("огірок", "cucumber"),
    ("перець", "bell pepper"),
    ("баклажан", "eggplant"),
    ("кабачок", "zucchini"),
    ("гарбуз", "pumpkin"),
    ("броколі", "broccoli"),
    ("цвітна капуста", "cauliflower"),
    ("шпинат", "spinach"),
    ("салат", "lettuce"),
    ("кукурудза", "corn"),
    ("горох", "peas"),
    ("квасоля", "beans"),
    ("сочевиця", "lentils"),
    ("гриби", "mushrooms"),
    ("кріп", "dill"),
    ("петрушка", "parsley"),
    ("базилік", "basil"),
    ("курка", "chicken"),
    ("куряче філе", "chicken breast"),
    ("яловичина", "beef"),
    ("свинина", "pork"),
    ("баранина", "lamb"),
    ("індичка", "turkey"),
    ("риба", "fish"),
    ("лосось", "salmon"),
    ("тунець", "tuna"),
    ("креветки", "shrimp"),
    ("яйце", "egg"),
    ("молоко", "milk"),
    ("вершки", "cream"),
    ("сметана", "sour cream"),
    ("масло", "butter"),
    ("сир", "cheese"),
    ("кисломолочний сир", "cottage cheese"),
    ("йогурт", "yogurt"),
    ("борошно", "flour"),
    ("рис", "rice"),
    ("гречка", "buckwheat"),
    ("вівсянка", "oatmeal"),
    ("макарони", "pasta"),
    ("хліб", "bread"),
    ("цукор", "sugar"),
    ("сіль", "salt"),
    ("мед", "honey"),
    ("олія", "vegetable oil"),
    ("оливкова олія", "olive oil"),
    ("оцет", "vinegar"),
    ("горіхи", "nuts"),
    ("волоські горіхи", "walnuts"),
    ("мигдаль", "almonds"),
    ("шоколад", "chocolate"),
    ("какао", "cocoa"),
    ("кориця", "cinnamon"),
    ("імбир", "ginger"),
    ("дріжджі", "yeast"),
)


def normalize(text: str) -> str:
    """Normalize text for lookups: trim surrounding whitespace, lower-case."""
    return text.strip().lower()


class Dictionary:
    """Immutable forward/reverse term mapping.

    Keys of both directions are normalized. Values are stored verbatim and
    returned as stored. The reverse mapping is derived from the forward one;
    when several source terms share a target term the first one wins.
    """

    def __init__(self, entries: Iterable[Tuple[str, str]]) -> None:
        forward: Dict[str, str] = {}
        for source_term, target_term in entries:
            forward[normalize(source_term)] = target_term
        reverse: Dict[str, str] = {}
        for source_term, target_term in forward.items():
            key = normalize(target_term)
            if key in reverse:
                logger.debug(
                    f"Reverse entry '{key}' already maps to '{reverse[key]}', "
                    f"ignoring '{source_term}'"
                )
                continue
            reverse[key] = source_term
        self._forward: Mapping[str, str] = MappingProxyType(forward)
        self._reverse: Mapping[str, str] = MappingProxyType(reverse)

    def __len__(self) -> int:
        return len(self._forward)

    @property
    def forward(self) -> Mapping[str, str]:
        return self._forward

    @property
    def reverse(self) -> Mapping[str, str]:
        return self._reverse

    def to_target(self, text: str) -> Optional[str]:
        return self._forward.get(normalize(text))

    def to_source(self, text: str) -> Optional[str]:
        return self._reverse.get(normalize(text))

    @classmethod
    def load(cls, extra_path: Optional[Path] = None) -> "Dictionary":
        """Build the built-in dictionary, merged with an optional glossary file."""
        entries = list(BUILTIN_ENTRIES)
        if extra_path is not None:
            extra = load_glossary(extra_path)
            logger.info(f"Loaded {len(extra)} glossary entries from {extra_path}")
            entries.extend(extra.items())
        return cls(entries)


def load_glossary(path: Path) -> Dict[str, str]:
    """Read a YAML or JSON mapping of source terms to target terms."""
    if not path.exists():
        raise FileNotFoundError(f"Glossary not found: {path}")
    if path.suffix.lower() in {".yml", ".yaml"}:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    else:
        data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise TypeError(f"Glossary must be a mapping, got {type(data).__name__}")
    return {str(k): str(v) for k, v in data.items()}


__all__ = ["BUILTIN_ENTRIES", "Dictionary", "load_glossary", "normalize"]
