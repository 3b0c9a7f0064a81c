"""Search intent extraction.

The intent layer converts a free-text place search ("late night ramen near me in shibuya") into a
strict `ParsedIntent` object, which is then used to build the downstream place-ranking filter.
"""
