"""
Test suite for mxwrap.

Focus areas:
- Reducer purity and structural sharing
- API call lifecycle
- Event projections and per-type reduction
- Batching and dispatch ordering
"""
