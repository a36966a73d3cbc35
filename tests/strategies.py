"""Hypothesis strategies for property-based testing of maybekit types."""

from hypothesis import strategies as st

# Basic value strategies
integers = st.integers()
texts = st.text(min_size=0, max_size=100)
booleans = st.booleans()
finite_floats = st.floats(allow_nan=False)

# Payloads with a tagged representation, so no value is mistaken for Empty
tagged_values = st.one_of(integers, texts, booleans, st.binary(max_size=20))

# Sequence payloads for iteration
sequences = st.one_of(
    texts,
    st.lists(integers, max_size=20),
    st.tuples(integers, texts, booleans),
)
