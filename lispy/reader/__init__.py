from lispy.reader.parser import ParseNode, lex, parse, TokenStream
from lispy.reader.reader import read, read_source

__all__ = ["ParseNode", "TokenStream", "lex", "parse", "read", "read_source"]
