"""API layer: canonical read surface for the server and the CLI.

Rules:

1. Raw request parameters are normalized here, nowhere else
2. Only call aggregators through PokedexService
3. Return pydantic models; every failure leaves as a PokedexError subclass
"""
