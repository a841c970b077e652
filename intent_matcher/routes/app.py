"""Streamlit playground for trying utterances against an intent catalog."""

from __future__ import annotations

import json
import sys
from pathlib import Path

# Ensure project root is on path when running: streamlit run intent_matcher/routes/app.py
_root = Path(__file__).resolve().parents[2]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

import streamlit as st

from intent_matcher.config import configure_logging, get_settings, load_env
from intent_matcher.services.catalog_index import IndexCache
from intent_matcher.services.catalog_loader import validate_catalog
from intent_matcher.services.errors import IntentMatcherError
from intent_matcher.services.intent_classifier import STRATEGIES, ClassificationOptions, get_classifier

CATALOG_KEY = "catalog_json"
HISTORY_KEY = "classification_history"  # list[tuple[text, result dict]]


@st.cache_resource
def _index_cache(max_entries: int) -> IndexCache:
    return IndexCache(max_entries=max_entries)


def _init_state(default_catalog: dict) -> None:
    if CATALOG_KEY not in st.session_state:
        st.session_state[CATALOG_KEY] = json.dumps(default_catalog, ensure_ascii=False, indent=2)
    if HISTORY_KEY not in st.session_state:
        st.session_state[HISTORY_KEY] = []


def main() -> None:
    load_env()
    settings = get_settings()
    configure_logging(settings.log_level)

    st.set_page_config(page_title="Intent Classifier Playground", page_icon="🔎")
    st.title("Intent Classifier Playground")
    st.caption(
        "Fuzzy matching against example phrases. Results below the threshold, "
        "or too close to the runner-up, come back as **unknown**."
    )

    try:
        default_catalog = settings.catalog()
    except IntentMatcherError as e:
        st.error(f"Could not load INTENTS_PATH: {e.message}")
        default_catalog = {}
    _init_state(default_catalog)

    if st.button("Reset catalog and history", type="secondary"):
        for key in (CATALOG_KEY, HISTORY_KEY):
            if key in st.session_state:
                del st.session_state[key]
        st.rerun()

    with st.sidebar:
        st.header("Options")
        threshold = st.slider("Threshold", 0.0, 1.0, float(settings.threshold), 0.01)
        min_margin = st.slider("Minimum margin", 0.0, 1.0, float(settings.min_margin), 0.01)
        default_strategy = settings.strategy if settings.strategy in STRATEGIES else STRATEGIES[0]
        strategy = st.selectbox("Strategy", STRATEGIES, index=STRATEGIES.index(default_strategy))

    catalog_text = st.text_area("Intent catalog (JSON)", key=CATALOG_KEY, height=260)
    try:
        catalog = validate_catalog(json.loads(catalog_text or "{}"))
    except json.JSONDecodeError as e:
        st.error(f"Catalog is not valid JSON: {e}")
        return
    except IntentMatcherError as e:
        st.error(e.message)
        return

    index = _index_cache(settings.index_cache_size).get_or_build(catalog)
    st.caption(f"{len(index)} intents, {index.example_count} examples")

    classifier = get_classifier(strategy)
    options = ClassificationOptions(threshold=threshold, min_margin=min_margin)

    with st.form("classify_form", clear_on_submit=True):
        text = st.text_input("Utterance", placeholder="e.g., quiero ver mi recibo por favor")
        submitted = st.form_submit_button("Classify")

    if submitted and (text or "").strip():
        result = classifier.classify(text, index, options)
        st.session_state[HISTORY_KEY].insert(0, (text, result.to_dict()))

        if result.is_unknown:
            st.warning(f"**unknown** (best score {result.confidence:.3f})")
        else:
            st.success(f"**{result.intent}** (confidence {result.confidence:.3f})")

        with st.expander("Debug: top matches", expanded=False):
            st.table(
                [
                    {"intent": m.intent, "example": m.example, "score": round(m.score, 4)}
                    for m in classifier.top_matches(text, index, limit=5)
                ]
            )

    if st.session_state[HISTORY_KEY]:
        st.markdown("---")
        st.markdown("**History**")
        for past_text, past_result in st.session_state[HISTORY_KEY]:
            st.markdown(
                f"- `{past_text}` → **{past_result['intent']}** "
                f"({past_result['confidence']:.3f}, matched: {past_result['matchedExample']})"
            )


if __name__ == "__main__":
    main()
