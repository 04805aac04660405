from pressroom.stylesheet.parser import parse_declarations, parse_stylesheet, serialize_stylesheet

__all__ = ["parse_stylesheet", "parse_declarations", "serialize_stylesheet"]
