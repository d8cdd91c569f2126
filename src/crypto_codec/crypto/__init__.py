"""Cryptographic primitives wrapped for incremental, chunked use."""
