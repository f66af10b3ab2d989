"""Hypothesis strategies for culture names and resource keys."""

from __future__ import annotations

from hypothesis import strategies as st

__all__ = [
    "culture_names",
    "neutral_cultures",
    "resource_keys",
    "resource_values",
    "specific_cultures",
]

neutral_cultures = st.sampled_from(["en", "fr", "de", "lv", "pt", "zh", "es", "ja"])

territories = st.sampled_from(["US", "GB", "CA", "FR", "DE", "LV", "BR", "CN", "MX"])

specific_cultures = st.builds(lambda lang, terr: f"{lang}-{terr}", neutral_cultures, territories)

culture_names = st.one_of(neutral_cultures, specific_cultures)

resource_keys = st.text(
    alphabet=st.characters(categories=("Ll", "Lu", "Nd"), include_characters="_-."),
    min_size=1,
    max_size=30,
)

resource_values = st.text(max_size=50)
