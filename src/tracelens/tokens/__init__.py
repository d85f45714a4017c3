from tracelens.tokens.resolver import TokenResolver, format_token_amount

__all__ = ["TokenResolver", "format_token_amount"]
