from tracelens.decoder.abi import AbiParam, AbiSignature, display_value, is_unlimited, parse_text_signature
from tracelens.decoder.signature_decoder import SignatureDecoder

__all__ = [
    "AbiParam",
    "AbiSignature",
    "SignatureDecoder",
    "display_value",
    "is_unlimited",
    "parse_text_signature",
]
