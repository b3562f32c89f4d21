from cilisp.reader.parser import lex, TokenStream, QUIT, read

__all__ = ["lex", "TokenStream", "QUIT", "read"]
