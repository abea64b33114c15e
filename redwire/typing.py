from typing import Iterable, Mapping, Union

Number = Union[int, float]
EncodedT = Union[bytes, bytearray, memoryview]
DecodedT = Union[str, int, float]
EncodableT = Union[EncodedT, DecodedT]
_StringLikeT = Union[bytes, str, memoryview]
KeyT = _StringLikeT  # Main redis key space
PatternT = _StringLikeT  # Patterns matched against keys, fields etc
FieldT = EncodableT  # Fields within hash tables and geo commands
KeysT = Union[KeyT, Iterable[KeyT]]
ChannelT = _StringLikeT
ScriptTextT = _StringLikeT
TimeoutSecT = Union[int, float, _StringLikeT]
ZScoreBoundT = Union[float, str]  # str allows for the [ or ( prefix
# Mapping is not covariant in the key type
AnyFieldT = Union[FieldT, KeyT]
ZAddMappingT = Mapping[AnyFieldT, Number]
HashMappingT = Mapping[AnyFieldT, EncodableT]
