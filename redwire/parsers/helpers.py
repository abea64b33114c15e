"""
Reply readers.

Every reader takes the reply read from the connection and the connection's
encoder and returns the Python value handed back to the caller. An
``ErrorReply`` raises the exception it carries; a reply of the wrong kind
raises ``TypeMismatchError``. Neither touches the health of the connection.
"""
from typing import List, NamedTuple, Optional

from ..exceptions import TypeMismatchError
from ..reply import ArrayReply, BulkReply, ErrorReply, IntegerReply, Reply, StatusReply
from ..utils import str_if_bytes


class ScoredMember(NamedTuple):
    member: object
    score: float


class ScanResult(NamedTuple):
    cursor: int
    results: object


class Slowlog(NamedTuple):
    id: int
    timestamp: int
    execution_time: int
    args: List[object]


class GeoCoordinate(NamedTuple):
    longitude: float
    latitude: float


class GeoRadiusMember(NamedTuple):
    member: object
    distance: Optional[float]
    hash: Optional[int]
    coordinate: Optional[GeoCoordinate]


class ClusterNode(NamedTuple):
    host: str
    port: int
    node_id: Optional[str]


class ClusterSlot(NamedTuple):
    start: int
    end: int
    master: ClusterNode
    replicas: List[ClusterNode]


def _expect(reply, *kinds):
    if isinstance(reply, ErrorReply):
        raise reply.exception
    if not isinstance(reply, kinds):
        expected = " or ".join(kind.__name__ for kind in kinds)
        raise TypeMismatchError(f"Expected {expected}, got {reply!r}")
    return reply


def _array_items(reply) -> Optional[List[Reply]]:
    return _expect(reply, ArrayReply).value


def status_reply(reply, encoder) -> str:
    return _expect(reply, StatusReply).value


def ok_reply(reply, encoder) -> bool:
    value = status_reply(reply, encoder)
    if value != "OK":
        raise TypeMismatchError(f"Expected OK, got {value!r}")
    return True


def set_reply(reply, encoder):
    "``+OK`` when the value was stored, nil when NX/XX prevented it"
    if isinstance(reply, BulkReply) and reply.is_nil:
        return None
    return ok_reply(reply, encoder)


def binary_bulk_reply(reply, encoder) -> Optional[bytes]:
    return _expect(reply, BulkReply).value


def bulk_reply(reply, encoder):
    value = binary_bulk_reply(reply, encoder)
    if value is None:
        return None
    return encoder.decode(value)


def string_reply(reply, encoder) -> Optional[str]:
    "Bulk or status reply forced to ``str``"
    if isinstance(reply, StatusReply):
        return reply.value
    value = binary_bulk_reply(reply, encoder)
    if value is None:
        return None
    return encoder.decode(value, force=True)


def integer_reply(reply, encoder) -> int:
    return _expect(reply, IntegerReply).value


def optional_integer_reply(reply, encoder) -> Optional[int]:
    "Integer reply, or ``None`` for a nil bulk string"
    if isinstance(reply, BulkReply) and reply.is_nil:
        return None
    return integer_reply(reply, encoder)


def boolean_reply(reply, encoder) -> bool:
    return bool(integer_reply(reply, encoder))


def float_reply(reply, encoder) -> Optional[float]:
    value = binary_bulk_reply(reply, encoder)
    if value is None:
        return None
    return float(value)


def binary_multi_bulk_reply(reply, encoder) -> Optional[List[Optional[bytes]]]:
    items = _array_items(reply)
    if items is None:
        return None
    return [binary_bulk_reply(item, encoder) for item in items]


def multi_bulk_reply(reply, encoder) -> Optional[List[object]]:
    items = _array_items(reply)
    if items is None:
        return None
    return [bulk_reply(item, encoder) for item in items]


def integer_multi_bulk_reply(reply, encoder) -> Optional[List[int]]:
    items = _array_items(reply)
    if items is None:
        return None
    return [integer_reply(item, encoder) for item in items]


def optional_integer_multi_bulk_reply(reply, encoder) -> Optional[List[Optional[int]]]:
    "Array of integers where nil elements stand for missing values"
    items = _array_items(reply)
    if items is None:
        return None
    return [optional_integer_reply(item, encoder) for item in items]


def object_multi_bulk_reply(reply, encoder) -> Optional[List[Reply]]:
    "Heterogeneous array: the element replies are returned as they are"
    return _array_items(reply)


def bool_list_reply(reply, encoder) -> List[bool]:
    return [bool(value) for value in integer_multi_bulk_reply(reply, encoder) or ()]


def python_reply(reply, encoder):
    """
    Convert a reply tree into plain Python values. Bulk strings go through the
    encoder, error elements nested in arrays become exception instances.
    """
    if isinstance(reply, ErrorReply):
        raise reply.exception
    return _to_python(reply, encoder)


def _to_python(reply, encoder):
    if isinstance(reply, ArrayReply):
        if reply.value is None:
            return None
        return [_to_python(item, encoder) for item in reply.value]
    if isinstance(reply, BulkReply):
        return None if reply.value is None else encoder.decode(reply.value)
    return reply.to_python()


def pairs_to_dict(reply, encoder) -> dict:
    """Create a dict given a flat array of key/value pairs"""
    values = multi_bulk_reply(reply, encoder)
    if values is None:
        return {}
    it = iter(values)
    return dict(zip(it, it))


def config_reply(reply, encoder) -> dict:
    values = multi_bulk_reply(reply, encoder) or []
    values = [str_if_bytes(value) if value is not None else None for value in values]
    it = iter(values)
    return dict(zip(it, it))


def scored_members_reply(reply, encoder) -> List[ScoredMember]:
    "Flat ``member, score, member, score`` array as (member, score) pairs"
    values = binary_multi_bulk_reply(reply, encoder) or []
    if len(values) % 2:
        raise TypeMismatchError("Expected an even number of member/score items")
    it = iter(values)
    return [
        ScoredMember(encoder.decode(member), float(score)) for member, score in zip(it, it)
    ]


def _scan_items(reply):
    items = _array_items(reply)
    if items is None or len(items) != 2:
        raise TypeMismatchError(f"Expected a [cursor, items] scan reply, got {reply!r}")
    cursor = binary_bulk_reply(items[0], None)
    try:
        return int(cursor), items[1]
    except (TypeError, ValueError):
        raise TypeMismatchError(f"Invalid scan cursor {cursor!r}")


def scan_reply(reply, encoder) -> ScanResult:
    cursor, items = _scan_items(reply)
    return ScanResult(cursor, multi_bulk_reply(items, encoder) or [])


def hscan_reply(reply, encoder) -> ScanResult:
    cursor, items = _scan_items(reply)
    return ScanResult(cursor, pairs_to_dict(items, encoder))


def zscan_reply(reply, encoder) -> ScanResult:
    cursor, items = _scan_items(reply)
    return ScanResult(cursor, scored_members_reply(items, encoder))


def slowlog_reply(reply, encoder) -> List[Slowlog]:
    entries = []
    for item in _array_items(reply) or ():
        fields = _array_items(item)
        if fields is None or len(fields) < 4:
            raise TypeMismatchError(f"Malformed slowlog entry {item!r}")
        entries.append(
            Slowlog(
                integer_reply(fields[0], encoder),
                integer_reply(fields[1], encoder),
                integer_reply(fields[2], encoder),
                multi_bulk_reply(fields[3], encoder),
            )
        )
    return entries


def geopos_reply(reply, encoder) -> List[Optional[GeoCoordinate]]:
    positions = []
    for item in _array_items(reply) or ():
        coordinates = binary_multi_bulk_reply(item, encoder)
        if coordinates is None:
            positions.append(None)
            continue
        if len(coordinates) != 2:
            raise TypeMismatchError(f"Malformed coordinate {item!r}")
        positions.append(GeoCoordinate(float(coordinates[0]), float(coordinates[1])))
    return positions


def geodist_reply(reply, encoder) -> Optional[float]:
    return float_reply(reply, encoder)


def info_reply(reply, encoder) -> dict:
    """Parse the result of the INFO command into a Python dict"""
    info = {}
    response = str_if_bytes(binary_bulk_reply(reply, encoder) or b"")

    def get_value(value):
        if "," not in value or "=" not in value:
            try:
                if "." in value:
                    return float(value)
                else:
                    return int(value)
            except ValueError:
                return value
        else:
            sub_dict = {}
            for item in value.split(","):
                k, v = item.rsplit("=", 1)
                sub_dict[k] = get_value(v)
            return sub_dict

    for line in response.splitlines():
        if line and not line.startswith("#") and ":" in line:
            key, value = line.split(":", 1)
            info[key] = get_value(value)
    return info


def blocking_pop_reply(reply, encoder):
    "``[key, value]`` from BLPOP/BRPOP as a tuple, ``None`` on timeout"
    values = multi_bulk_reply(reply, encoder)
    return tuple(values) if values is not None else None


def sort_reply(reply, encoder, groups=None):
    """
    SORT values, or a list of ``groups``-sized tuples when several GET
    patterns were given
    """
    values = multi_bulk_reply(reply, encoder)
    if not values or not groups:
        return values
    return list(zip(*(values[i::groups] for i in range(groups))))


def _coordinate(item, encoder) -> GeoCoordinate:
    values = binary_multi_bulk_reply(item, encoder)
    if values is None or len(values) != 2:
        raise TypeMismatchError(f"Malformed coordinate {item!r}")
    return GeoCoordinate(float(values[0]), float(values[1]))


def georadius_reply(
    reply, encoder, withdist=False, withhash=False, withcoord=False
) -> List[GeoRadiusMember]:
    """
    GEORADIUS members. Without any WITH* option the server sends a flat list
    of names; otherwise each element is ``[name, dist?, hash?, [lon, lat]?]``
    in that order.
    """
    results = []
    nested = withdist or withhash or withcoord
    for item in _array_items(reply) or ():
        if not nested:
            results.append(GeoRadiusMember(bulk_reply(item, encoder), None, None, None))
            continue
        fields = _array_items(item)
        expected = 1 + withdist + withhash + withcoord
        if fields is None or len(fields) != expected:
            raise TypeMismatchError(f"Malformed GEORADIUS entry {item!r}")
        fields = iter(fields)
        member = bulk_reply(next(fields), encoder)
        distance = float_reply(next(fields), encoder) if withdist else None
        geohash = integer_reply(next(fields), encoder) if withhash else None
        coordinate = _coordinate(next(fields), encoder) if withcoord else None
        results.append(GeoRadiusMember(member, distance, geohash, coordinate))
    return results


def _cluster_node(item) -> ClusterNode:
    fields = _array_items(item)
    if fields is None or len(fields) < 2:
        raise TypeMismatchError(f"Malformed cluster node {item!r}")
    node_id = None
    if len(fields) > 2:
        node_id = str_if_bytes(binary_bulk_reply(fields[2], None))
    return ClusterNode(
        str_if_bytes(binary_bulk_reply(fields[0], None)),
        integer_reply(fields[1], None),
        node_id,
    )


def cluster_slots_reply(reply, encoder) -> List[ClusterSlot]:
    "``[start, end, master, replica...]`` entries of CLUSTER SLOTS"
    slots = []
    for item in _array_items(reply) or ():
        fields = _array_items(item)
        if fields is None or len(fields) < 3:
            raise TypeMismatchError(f"Malformed cluster slot range {item!r}")
        slots.append(
            ClusterSlot(
                integer_reply(fields[0], encoder),
                integer_reply(fields[1], encoder),
                _cluster_node(fields[2]),
                [_cluster_node(replica) for replica in fields[3:]],
            )
        )
    return slots
