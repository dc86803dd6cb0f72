"""Core domain modules.

- scenarios: per-scenario state for the Kraken behaviour suite

Exchange plumbing (signing, REST client, response records) lives in `cex/`.
"""
