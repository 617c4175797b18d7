from pokeindex.parsers.pokeapi import parse_detail, parse_index, parse_resource_id

__all__ = [
    "parse_detail",
    "parse_index",
    "parse_resource_id",
]
