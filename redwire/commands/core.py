import datetime
import time
from functools import partial

from redwire.exceptions import DataError
from redwire.parsers.helpers import (
    blocking_pop_reply,
    cluster_slots_reply,
    bool_list_reply,
    boolean_reply,
    bulk_reply,
    config_reply,
    float_reply,
    geodist_reply,
    georadius_reply,
    geopos_reply,
    hscan_reply,
    info_reply,
    integer_reply,
    multi_bulk_reply,
    ok_reply,
    optional_integer_multi_bulk_reply,
    optional_integer_reply,
    pairs_to_dict,
    python_reply,
    scan_reply,
    scored_members_reply,
    set_reply,
    slowlog_reply,
    sort_reply,
    status_reply,
    string_reply,
    zscan_reply,
)

from .helpers import list_or_args


class BasicKeyCommands:
    """
    Commands on keys and string values.
    """

    def delete(self, *names):
        """
        Delete one or more keys specified by ``names``

        For more information check https://redis.io/commands/del
        """
        return self.execute_command("DEL", *names, callback=integer_reply)

    def exists(self, *names):
        """
        Returns the number of ``names`` that exist

        For more information check https://redis.io/commands/exists
        """
        return self.execute_command("EXISTS", *names, callback=integer_reply)

    def type(self, name):
        """
        Returns the type of key ``name``

        For more information check https://redis.io/commands/type
        """
        return self.execute_command("TYPE", name, callback=status_reply)

    def expire(self, name, time):
        """
        Set an expire flag on key ``name`` for ``time`` seconds. ``time``
        can be represented by an integer or a Python timedelta object.

        Returns True when the timeout was set.

        For more information check https://redis.io/commands/expire
        """
        if isinstance(time, datetime.timedelta):
            time = int(time.total_seconds())
        return self.execute_command("EXPIRE", name, time, callback=boolean_reply)

    def expireat(self, name, when):
        """
        Set an expire flag on key ``name``. ``when`` can be represented
        as an integer indicating unix time or a Python datetime object.

        For more information check https://redis.io/commands/expireat
        """
        if isinstance(when, datetime.datetime):
            when = int(time.mktime(when.timetuple()))
        return self.execute_command("EXPIREAT", name, when, callback=boolean_reply)

    def pexpire(self, name, time):
        """
        Set an expire flag on key ``name`` for ``time`` milliseconds.
        ``time`` can be represented by an integer or a Python timedelta
        object.

        For more information check https://redis.io/commands/pexpire
        """
        if isinstance(time, datetime.timedelta):
            time = int(time.total_seconds() * 1000)
        return self.execute_command("PEXPIRE", name, time, callback=boolean_reply)

    def pexpireat(self, name, when):
        """
        Set an expire flag on key ``name``. ``when`` can be represented
        as an integer representing unix time in milliseconds (unix time * 1000)
        or a Python datetime object.

        For more information check https://redis.io/commands/pexpireat
        """
        if isinstance(when, datetime.datetime):
            ms = int(when.microsecond / 1000)
            when = int(time.mktime(when.timetuple())) * 1000 + ms
        return self.execute_command("PEXPIREAT", name, when, callback=boolean_reply)

    def ttl(self, name):
        """
        Returns the number of seconds until the key ``name`` will expire

        For more information check https://redis.io/commands/ttl
        """
        return self.execute_command("TTL", name, callback=integer_reply)

    def pttl(self, name):
        """
        Returns the number of milliseconds until the key ``name`` will expire

        For more information check https://redis.io/commands/pttl
        """
        return self.execute_command("PTTL", name, callback=integer_reply)

    def persist(self, name):
        """
        Removes an expiration on ``name``

        For more information check https://redis.io/commands/persist
        """
        return self.execute_command("PERSIST", name, callback=boolean_reply)

    def keys(self, pattern="*"):
        """
        Returns a list of keys matching ``pattern``

        For more information check https://redis.io/commands/keys
        """
        return self.execute_command("KEYS", pattern, callback=multi_bulk_reply)

    def rename(self, src, dst):
        """
        Rename key ``src`` to ``dst``

        For more information check https://redis.io/commands/rename
        """
        return self.execute_command("RENAME", src, dst, callback=ok_reply)

    def renamenx(self, src, dst):
        """
        Rename key ``src`` to ``dst`` if ``dst`` doesn't already exist

        For more information check https://redis.io/commands/renamenx
        """
        return self.execute_command("RENAMENX", src, dst, callback=boolean_reply)

    def move(self, name, db):
        """
        Moves the key ``name`` to a different Redis database ``db``

        For more information check https://redis.io/commands/move
        """
        return self.execute_command("MOVE", name, db, callback=boolean_reply)

    def randomkey(self):
        """
        Returns the name of a random key

        For more information check https://redis.io/commands/randomkey
        """
        return self.execute_command("RANDOMKEY", callback=bulk_reply)

    def set(self, name, value, ex=None, px=None, nx=False, xx=False):
        """
        Set the value at key ``name`` to ``value``

        ``ex`` sets an expire flag on key ``name`` for ``ex`` seconds.

        ``px`` sets an expire flag on key ``name`` for ``px`` milliseconds.

        ``nx`` if set to True, set the value at key ``name`` to ``value`` only
            if it does not exist.

        ``xx`` if set to True, set the value at key ``name`` to ``value`` only
            if it already exists.

        Returns True when the value was stored and None when ``nx`` or
        ``xx`` prevented it.

        For more information check https://redis.io/commands/set
        """
        pieces = [name, value]
        if ex is not None:
            pieces.append("EX")
            if isinstance(ex, datetime.timedelta):
                pieces.append(int(ex.total_seconds()))
            elif isinstance(ex, int):
                pieces.append(ex)
            else:
                raise DataError("ex must be datetime.timedelta or int")
        if px is not None:
            pieces.append("PX")
            if isinstance(px, datetime.timedelta):
                pieces.append(int(px.total_seconds() * 1000))
            elif isinstance(px, int):
                pieces.append(px)
            else:
                raise DataError("px must be datetime.timedelta or int")
        if nx and xx:
            raise DataError("``nx`` and ``xx`` are mutually exclusive")
        if nx:
            pieces.append("NX")
        if xx:
            pieces.append("XX")
        return self.execute_command("SET", *pieces, callback=set_reply)

    def get(self, name):
        """
        Return the value at key ``name``, or None if the key doesn't exist

        For more information check https://redis.io/commands/get
        """
        return self.execute_command("GET", name, callback=bulk_reply)

    def getset(self, name, value):
        """
        Sets the value at key ``name`` to ``value``
        and returns the old value at key ``name`` atomically.

        For more information check https://redis.io/commands/getset
        """
        return self.execute_command("GETSET", name, value, callback=bulk_reply)

    def setnx(self, name, value):
        """
        Set the value of key ``name`` to ``value`` if key doesn't exist

        For more information check https://redis.io/commands/setnx
        """
        return self.execute_command("SETNX", name, value, callback=boolean_reply)

    def setex(self, name, time, value):
        """
        Set the value of key ``name`` to ``value`` that expires in ``time``
        seconds. ``time`` can be represented by an integer or a Python
        timedelta object.

        For more information check https://redis.io/commands/setex
        """
        if isinstance(time, datetime.timedelta):
            time = int(time.total_seconds())
        return self.execute_command("SETEX", name, time, value, callback=ok_reply)

    def psetex(self, name, time_ms, value):
        """
        Set the value of key ``name`` to ``value`` that expires in ``time_ms``
        milliseconds. ``time_ms`` can be represented by an integer or a Python
        timedelta object

        For more information check https://redis.io/commands/psetex
        """
        if isinstance(time_ms, datetime.timedelta):
            time_ms = int(time_ms.total_seconds() * 1000)
        return self.execute_command("PSETEX", name, time_ms, value, callback=ok_reply)

    def mget(self, keys, *args):
        """
        Returns a list of values ordered identically to ``keys``

        For more information check https://redis.io/commands/mget
        """
        args = list_or_args(keys, args)
        return self.execute_command("MGET", *args, callback=multi_bulk_reply)

    def mset(self, mapping):
        """
        Sets key/values based on a mapping. Mapping is a dictionary of
        key/value pairs. Both keys and values should be strings or types that
        can be cast to a string via str().

        For more information check https://redis.io/commands/mset
        """
        items = []
        for pair in mapping.items():
            items.extend(pair)
        return self.execute_command("MSET", *items, callback=ok_reply)

    def msetnx(self, mapping):
        """
        Sets key/values based on a mapping if none of the keys are already set.
        Returns a boolean indicating if the operation was successful.

        For more information check https://redis.io/commands/msetnx
        """
        items = []
        for pair in mapping.items():
            items.extend(pair)
        return self.execute_command("MSETNX", *items, callback=boolean_reply)

    def incr(self, name):
        return self.incrby(name, 1)

    def incrby(self, name, amount=1):
        """
        Increments the value of ``key`` by ``amount``.  If no key exists,
        the value will be initialized as ``amount``

        For more information check https://redis.io/commands/incrby
        """
        return self.execute_command("INCRBY", name, amount, callback=integer_reply)

    def incrbyfloat(self, name, amount=1.0):
        """
        Increments the value at key ``name`` by floating ``amount``.
        If no key exists, the value will be initialized as ``amount``

        For more information check https://redis.io/commands/incrbyfloat
        """
        return self.execute_command("INCRBYFLOAT", name, amount, callback=float_reply)

    def decr(self, name):
        return self.decrby(name, 1)

    def decrby(self, name, amount=1):
        """
        Decrements the value of ``key`` by ``amount``.  If no key exists,
        the value will be initialized as 0 - ``amount``

        For more information check https://redis.io/commands/decrby
        """
        return self.execute_command("DECRBY", name, amount, callback=integer_reply)

    def append(self, key, value):
        """
        Appends the string ``value`` to the value at ``key``. If ``key``
        doesn't already exist, create it with a value of ``value``.
        Returns the new length of the value at ``key``.

        For more information check https://redis.io/commands/append
        """
        return self.execute_command("APPEND", key, value, callback=integer_reply)

    def strlen(self, name):
        """
        Return the number of bytes stored in the value of ``name``

        For more information check https://redis.io/commands/strlen
        """
        return self.execute_command("STRLEN", name, callback=integer_reply)

    def getrange(self, key, start, end):
        """
        Returns the substring of the string value stored at ``key``,
        determined by the offsets ``start`` and ``end`` (both are inclusive)

        For more information check https://redis.io/commands/getrange
        """
        return self.execute_command("GETRANGE", key, start, end, callback=bulk_reply)

    def setrange(self, name, offset, value):
        """
        Overwrite bytes in the value of ``name`` starting at ``offset`` with
        ``value``. Returns the length of the new string.

        For more information check https://redis.io/commands/setrange
        """
        return self.execute_command(
            "SETRANGE", name, offset, value, callback=integer_reply
        )

    def setbit(self, name, offset, value):
        """
        Flag the ``offset`` in ``name`` as ``value``. Returns a boolean
        indicating the previous value of ``offset``.

        For more information check https://redis.io/commands/setbit
        """
        value = value and 1 or 0
        return self.execute_command(
            "SETBIT", name, offset, value, callback=boolean_reply
        )

    def getbit(self, name, offset):
        """
        Returns an integer indicating the value of ``offset`` in ``name``

        For more information check https://redis.io/commands/getbit
        """
        return self.execute_command("GETBIT", name, offset, callback=integer_reply)

    def bitcount(self, key, start=None, end=None):
        """
        Returns the count of set bits in the value of ``key``.  Optional
        ``start`` and ``end`` parameters indicate which bytes to consider

        For more information check https://redis.io/commands/bitcount
        """
        params = [key]
        if start is not None and end is not None:
            params.append(start)
            params.append(end)
        elif (start is not None and end is None) or (end is not None and start is None):
            raise DataError("Both start and end must be specified")
        return self.execute_command("BITCOUNT", *params, callback=integer_reply)

    def bitop(self, operation, dest, *keys):
        """
        Perform a bitwise operation using ``operation`` between ``keys`` and
        store the result in ``dest``.

        For more information check https://redis.io/commands/bitop
        """
        if str(operation).upper() not in ("AND", "OR", "XOR", "NOT"):
            raise DataError("BITOP operation must be AND, OR, XOR or NOT")
        if not keys:
            raise DataError("BITOP requires at least one source key")
        return self.execute_command(
            "BITOP", operation, dest, *keys, callback=integer_reply
        )

    def bitpos(self, key, bit, start=None, end=None):
        """
        Return the position of the first bit set to 1 or 0 in a string.
        ``start`` and ``end`` defines search range. The range is interpreted
        as a range of bytes and not a range of bits, so start=0 and end=2
        means to look at the first three bytes.

        For more information check https://redis.io/commands/bitpos
        """
        if bit not in (0, 1):
            raise DataError("bit must be 0 or 1")
        params = [key, bit]
        if start is not None:
            params.append(start)
        if start is not None and end is not None:
            params.append(end)
        elif start is None and end is not None:
            raise DataError("start argument is not set, when end is specified")
        return self.execute_command("BITPOS", *params, callback=integer_reply)

    def bitfield(self, key, *arguments):
        """
        Run the BITFIELD sub-commands in ``arguments`` (for example
        ``"INCRBY", "i5", 100, 1``) against ``key``. An overflowing INCRBY
        under ``OVERFLOW FAIL`` yields None.

        For more information check https://redis.io/commands/bitfield
        """
        return self.execute_command(
            "BITFIELD", key, *arguments, callback=optional_integer_multi_bulk_reply
        )

    def sort(
        self,
        name,
        start=None,
        num=None,
        by=None,
        get=None,
        desc=False,
        alpha=False,
        store=None,
        groups=False,
    ):
        """
        Sort and return the list, set or sorted set at ``name``.

        ``start`` and ``num`` allow for paging through the sorted data

        ``by`` allows using an external key to weight and sort the items.
            Use an "*" to indicate where in the key the item value is located

        ``get`` allows for returning items from external keys rather than the
            sorted data itself.  Use an "*" to indicate where in the key
            the item value is located

        ``desc`` allows for reversing the sort

        ``alpha`` allows for sorting lexicographically rather than numerically

        ``store`` stores the result in the key ``store`` and returns the
            number of stored elements instead

        ``groups`` if set to True and if ``get`` contains at least two
            elements, sort will return a list of tuples, each containing the
            values fetched from the arguments to ``get``.

        For more information check https://redis.io/commands/sort
        """
        if (start is None) != (num is None):
            raise DataError("``start`` and ``num`` must both be specified")

        pieces = [name]
        if by is not None:
            pieces.extend(["BY", by])
        if start is not None:
            pieces.extend(["LIMIT", start, num])
        if get is not None:
            # a single pattern may be given as a plain string
            if isinstance(get, (bytes, str)):
                get = [get]
            for pattern in get:
                pieces.extend(["GET", pattern])
        if desc:
            pieces.append("DESC")
        if alpha:
            pieces.append("ALPHA")
        if groups and (not get or len(get) < 2):
            raise DataError(
                'when using "groups" the "get" argument '
                "must be specified and contain at least two keys"
            )
        if store is not None:
            pieces.extend(["STORE", store])
            return self.execute_command("SORT", *pieces, callback=integer_reply)
        callback = partial(sort_reply, groups=len(get) if groups else None)
        return self.execute_command("SORT", *pieces, callback=callback)


class HashCommands:
    def hset(self, name, key=None, value=None, mapping=None):
        """
        Set ``key`` to ``value`` within hash ``name``,
        ``mapping`` accepts a dict of key/value pairs that will be
        added to hash ``name``.
        Returns the number of fields that were added.

        For more information check https://redis.io/commands/hset
        """
        if key is None and not mapping:
            raise DataError("'hset' with no key value pairs")
        items = []
        if key is not None:
            items.extend((key, value))
        if mapping:
            for pair in mapping.items():
                items.extend(pair)
        return self.execute_command("HSET", name, *items, callback=integer_reply)

    def hget(self, name, key):
        """
        Return the value of ``key`` within the hash ``name``

        For more information check https://redis.io/commands/hget
        """
        return self.execute_command("HGET", name, key, callback=bulk_reply)

    def hsetnx(self, name, key, value):
        """
        Set ``key`` to ``value`` within hash ``name`` if ``key`` does not
        exist.  Returns True if HSETNX created a field, otherwise False.

        For more information check https://redis.io/commands/hsetnx
        """
        return self.execute_command("HSETNX", name, key, value, callback=boolean_reply)

    def hmset(self, name, mapping):
        """
        Set key to value within hash ``name`` for each corresponding
        key and value from the ``mapping`` dict.

        For more information check https://redis.io/commands/hmset
        """
        if not mapping:
            raise DataError("'hmset' with 'mapping' of length 0")
        items = []
        for pair in mapping.items():
            items.extend(pair)
        return self.execute_command("HMSET", name, *items, callback=ok_reply)

    def hmget(self, name, keys, *args):
        """
        Returns a list of values ordered identically to ``keys``

        For more information check https://redis.io/commands/hmget
        """
        args = list_or_args(keys, args)
        return self.execute_command("HMGET", name, *args, callback=multi_bulk_reply)

    def hincrby(self, name, key, amount=1):
        """
        Increment the value of ``key`` in hash ``name`` by ``amount``

        For more information check https://redis.io/commands/hincrby
        """
        return self.execute_command(
            "HINCRBY", name, key, amount, callback=integer_reply
        )

    def hincrbyfloat(self, name, key, amount=1.0):
        """
        Increment the value of ``key`` in hash ``name`` by floating ``amount``

        For more information check https://redis.io/commands/hincrbyfloat
        """
        return self.execute_command(
            "HINCRBYFLOAT", name, key, amount, callback=float_reply
        )

    def hexists(self, name, key):
        """
        Returns a boolean indicating if ``key`` exists within hash ``name``

        For more information check https://redis.io/commands/hexists
        """
        return self.execute_command("HEXISTS", name, key, callback=boolean_reply)

    def hdel(self, name, *keys):
        """
        Delete ``keys`` from hash ``name``

        For more information check https://redis.io/commands/hdel
        """
        return self.execute_command("HDEL", name, *keys, callback=integer_reply)

    def hlen(self, name):
        """
        Return the number of elements in hash ``name``

        For more information check https://redis.io/commands/hlen
        """
        return self.execute_command("HLEN", name, callback=integer_reply)

    def hkeys(self, name):
        """
        Return the list of keys within hash ``name``

        For more information check https://redis.io/commands/hkeys
        """
        return self.execute_command("HKEYS", name, callback=multi_bulk_reply)

    def hvals(self, name):
        """
        Return the list of values within hash ``name``

        For more information check https://redis.io/commands/hvals
        """
        return self.execute_command("HVALS", name, callback=multi_bulk_reply)

    def hgetall(self, name):
        """
        Return a Python dict of the hash's name/value pairs

        For more information check https://redis.io/commands/hgetall
        """
        return self.execute_command("HGETALL", name, callback=pairs_to_dict)


class ListCommands:
    """
    Redis commands for List data type.
    The blocking pops wait on the server without a client side deadline.
    """

    def blpop(self, keys, timeout=0):
        """
        LPOP a value off of the first non-empty list
        named in the ``keys`` list.

        If none of the lists in ``keys`` has a value to LPOP, then block
        for ``timeout`` seconds, or until a value gets pushed on to one
        of the lists.

        If timeout is 0, then block indefinitely.

        For more information check https://redis.io/commands/blpop
        """
        if timeout is None:
            timeout = 0
        keys = list_or_args(keys, None)
        keys.append(timeout)
        return self.execute_command(
            "BLPOP", *keys, callback=blocking_pop_reply, blocking=True
        )

    def brpop(self, keys, timeout=0):
        """
        RPOP a value off of the first non-empty list
        named in the ``keys`` list.

        If none of the lists in ``keys`` has a value to RPOP, then block
        for ``timeout`` seconds, or until a value gets pushed on to one
        of the lists.

        If timeout is 0, then block indefinitely.

        For more information check https://redis.io/commands/brpop
        """
        if timeout is None:
            timeout = 0
        keys = list_or_args(keys, None)
        keys.append(timeout)
        return self.execute_command(
            "BRPOP", *keys, callback=blocking_pop_reply, blocking=True
        )

    def brpoplpush(self, src, dst, timeout=0):
        """
        Pop a value off the tail of ``src``, push it on the head of ``dst``
        and then return it.

        This command blocks until a value is in ``src`` or until ``timeout``
        seconds elapse, whichever is first. A ``timeout`` value of 0 blocks
        forever.

        For more information check https://redis.io/commands/brpoplpush
        """
        if timeout is None:
            timeout = 0
        return self.execute_command(
            "BRPOPLPUSH", src, dst, timeout, callback=bulk_reply, blocking=True
        )

    def lindex(self, name, index):
        """
        Return the item from list ``name`` at position ``index``

        Negative indexes are supported and will return an item at the
        end of the list

        For more information check https://redis.io/commands/lindex
        """
        return self.execute_command("LINDEX", name, index, callback=bulk_reply)

    def linsert(self, name, where, refvalue, value):
        """
        Insert ``value`` in list ``name`` either immediately before or after
        [``where``] ``refvalue``

        Returns the new length of the list on success or -1 if ``refvalue``
        is not in the list.

        For more information check https://redis.io/commands/linsert
        """
        return self.execute_command(
            "LINSERT", name, where, refvalue, value, callback=integer_reply
        )

    def llen(self, name):
        """
        Return the length of the list ``name``

        For more information check https://redis.io/commands/llen
        """
        return self.execute_command("LLEN", name, callback=integer_reply)

    def lpop(self, name):
        """
        Removes and returns the first element of the list ``name``.

        For more information check https://redis.io/commands/lpop
        """
        return self.execute_command("LPOP", name, callback=bulk_reply)

    def lpush(self, name, *values):
        """
        Push ``values`` onto the head of the list ``name``

        For more information check https://redis.io/commands/lpush
        """
        return self.execute_command("LPUSH", name, *values, callback=integer_reply)

    def lpushx(self, name, *values):
        """
        Push ``value`` onto the head of the list ``name`` if ``name`` exists

        For more information check https://redis.io/commands/lpushx
        """
        return self.execute_command("LPUSHX", name, *values, callback=integer_reply)

    def lrange(self, name, start, end):
        """
        Return a slice of the list ``name`` between
        position ``start`` and ``end``

        ``start`` and ``end`` can be negative numbers just like
        Python slicing notation

        For more information check https://redis.io/commands/lrange
        """
        return self.execute_command(
            "LRANGE", name, start, end, callback=multi_bulk_reply
        )

    def lrem(self, name, count, value):
        """
        Remove the first ``count`` occurrences of elements equal to ``value``
        from the list stored at ``name``.

        The count argument influences the operation in the following ways:
            count > 0: Remove elements equal to value moving from head to tail.
            count < 0: Remove elements equal to value moving from tail to head.
            count = 0: Remove all elements equal to value.

        For more information check https://redis.io/commands/lrem
        """
        return self.execute_command("LREM", name, count, value, callback=integer_reply)

    def lset(self, name, index, value):
        """
        Set element at ``index`` of list ``name`` to ``value``

        For more information check https://redis.io/commands/lset
        """
        return self.execute_command("LSET", name, index, value, callback=ok_reply)

    def ltrim(self, name, start, end):
        """
        Trim the list ``name``, removing all values not within the slice
        between ``start`` and ``end``

        ``start`` and ``end`` can be negative numbers just like
        Python slicing notation

        For more information check https://redis.io/commands/ltrim
        """
        return self.execute_command("LTRIM", name, start, end, callback=ok_reply)

    def rpop(self, name):
        """
        Removes and returns the last element of the list ``name``.

        For more information check https://redis.io/commands/rpop
        """
        return self.execute_command("RPOP", name, callback=bulk_reply)

    def rpoplpush(self, src, dst):
        """
        RPOP a value off of the ``src`` list and atomically LPUSH it
        on to the ``dst`` list.  Returns the value.

        For more information check https://redis.io/commands/rpoplpush
        """
        return self.execute_command("RPOPLPUSH", src, dst, callback=bulk_reply)

    def rpush(self, name, *values):
        """
        Push ``values`` onto the tail of the list ``name``

        For more information check https://redis.io/commands/rpush
        """
        return self.execute_command("RPUSH", name, *values, callback=integer_reply)

    def rpushx(self, name, *values):
        """
        Push ``value`` onto the tail of the list ``name`` if ``name`` exists

        For more information check https://redis.io/commands/rpushx
        """
        return self.execute_command("RPUSHX", name, *values, callback=integer_reply)


class ScanCommands:
    """
    Redis SCAN commands. Every call returns a ``ScanResult`` with the next
    cursor, 0 once the iteration is complete.
    """

    def scan(self, cursor=0, match=None, count=None):
        """
        Incrementally return lists of key names.

        ``match`` allows for filtering the keys by pattern

        ``count`` provides a hint to Redis about the number of keys to
            return per batch.

        For more information check https://redis.io/commands/scan
        """
        pieces = [cursor]
        if match is not None:
            pieces.extend(["MATCH", match])
        if count is not None:
            pieces.extend(["COUNT", count])
        return self.execute_command("SCAN", *pieces, callback=scan_reply)

    def sscan(self, name, cursor=0, match=None, count=None):
        """
        Incrementally return lists of elements in a set.

        For more information check https://redis.io/commands/sscan
        """
        pieces = [name, cursor]
        if match is not None:
            pieces.extend(["MATCH", match])
        if count is not None:
            pieces.extend(["COUNT", count])
        return self.execute_command("SSCAN", *pieces, callback=scan_reply)

    def hscan(self, name, cursor=0, match=None, count=None):
        """
        Incrementally return key/value slices in a hash, as a dict.

        For more information check https://redis.io/commands/hscan
        """
        pieces = [name, cursor]
        if match is not None:
            pieces.extend(["MATCH", match])
        if count is not None:
            pieces.extend(["COUNT", count])
        return self.execute_command("HSCAN", *pieces, callback=hscan_reply)

    def zscan(self, name, cursor=0, match=None, count=None):
        """
        Incrementally return (member, score) pairs in a sorted set.

        For more information check https://redis.io/commands/zscan
        """
        pieces = [name, cursor]
        if match is not None:
            pieces.extend(["MATCH", match])
        if count is not None:
            pieces.extend(["COUNT", count])
        return self.execute_command("ZSCAN", *pieces, callback=zscan_reply)


class SetCommands:
    def sadd(self, name, *values):
        """
        Add ``value(s)`` to set ``name``

        For more information check https://redis.io/commands/sadd
        """
        return self.execute_command("SADD", name, *values, callback=integer_reply)

    def scard(self, name):
        """
        Return the number of elements in set ``name``

        For more information check https://redis.io/commands/scard
        """
        return self.execute_command("SCARD", name, callback=integer_reply)

    def sdiff(self, keys, *args):
        """
        Return the difference of sets specified by ``keys``

        For more information check https://redis.io/commands/sdiff
        """
        args = list_or_args(keys, args)
        return self.execute_command("SDIFF", *args, callback=_set_reply)

    def sdiffstore(self, dest, keys, *args):
        """
        Store the difference of sets specified by ``keys`` into a new
        set named ``dest``.  Returns the number of keys in the new set.

        For more information check https://redis.io/commands/sdiffstore
        """
        args = list_or_args(keys, args)
        return self.execute_command(
            "SDIFFSTORE", dest, *args, callback=integer_reply
        )

    def sinter(self, keys, *args):
        """
        Return the intersection of sets specified by ``keys``

        For more information check https://redis.io/commands/sinter
        """
        args = list_or_args(keys, args)
        return self.execute_command("SINTER", *args, callback=_set_reply)

    def sinterstore(self, dest, keys, *args):
        """
        Store the intersection of sets specified by ``keys`` into a new
        set named ``dest``.  Returns the number of keys in the new set.

        For more information check https://redis.io/commands/sinterstore
        """
        args = list_or_args(keys, args)
        return self.execute_command(
            "SINTERSTORE", dest, *args, callback=integer_reply
        )

    def sismember(self, name, value):
        """
        Return a boolean indicating if ``value`` is a member of set ``name``

        For more information check https://redis.io/commands/sismember
        """
        return self.execute_command("SISMEMBER", name, value, callback=boolean_reply)

    def smembers(self, name):
        """
        Return all members of the set ``name``

        For more information check https://redis.io/commands/smembers
        """
        return self.execute_command("SMEMBERS", name, callback=_set_reply)

    def smove(self, src, dst, value):
        """
        Move ``value`` from set ``src`` to set ``dst`` atomically

        For more information check https://redis.io/commands/smove
        """
        return self.execute_command("SMOVE", src, dst, value, callback=boolean_reply)

    def spop(self, name, count=None):
        """
        Remove and return a random member of set ``name``. With ``count``,
        remove and return a list of up to ``count`` members.

        For more information check https://redis.io/commands/spop
        """
        if count is None:
            return self.execute_command("SPOP", name, callback=bulk_reply)
        return self.execute_command("SPOP", name, count, callback=multi_bulk_reply)

    def srandmember(self, name, number=None):
        """
        If ``number`` is None, returns a random member of set ``name``.

        If ``number`` is supplied, returns a list of ``number`` random
        members of set ``name``.

        For more information check https://redis.io/commands/srandmember
        """
        if number is None:
            return self.execute_command("SRANDMEMBER", name, callback=bulk_reply)
        return self.execute_command(
            "SRANDMEMBER", name, number, callback=multi_bulk_reply
        )

    def srem(self, name, *values):
        """
        Remove ``values`` from set ``name``

        For more information check https://redis.io/commands/srem
        """
        return self.execute_command("SREM", name, *values, callback=integer_reply)

    def sunion(self, keys, *args):
        """
        Return the union of sets specified by ``keys``

        For more information check https://redis.io/commands/sunion
        """
        args = list_or_args(keys, args)
        return self.execute_command("SUNION", *args, callback=_set_reply)

    def sunionstore(self, dest, keys, *args):
        """
        Store the union of sets specified by ``keys`` into a new
        set named ``dest``.  Returns the number of keys in the new set.

        For more information check https://redis.io/commands/sunionstore
        """
        args = list_or_args(keys, args)
        return self.execute_command(
            "SUNIONSTORE", dest, *args, callback=integer_reply
        )


def _set_reply(reply, encoder):
    return set(multi_bulk_reply(reply, encoder) or ())


class SortedSetCommands:
    def zadd(self, name, mapping, nx=False, xx=False, ch=False):
        """
        Set any number of element-name, score pairs to the key ``name``. Pairs
        are specified as a dict of element-names keys to score values.

        ``nx`` forces ZADD to only create new elements and not to update
        scores for elements that already exist.

        ``xx`` forces ZADD to only update scores of elements that already
        exist. New elements will not be added.

        ``ch`` modifies the return value to be the numbers of elements changed.

        For more information check https://redis.io/commands/zadd
        """
        if not mapping:
            raise DataError("ZADD requires at least one element/score pair")
        if nx and xx:
            raise DataError("ZADD allows either 'nx' or 'xx', not both")
        pieces = []
        if nx:
            pieces.append("NX")
        if xx:
            pieces.append("XX")
        if ch:
            pieces.append("CH")
        for pair in mapping.items():
            pieces.append(pair[1])
            pieces.append(pair[0])
        return self.execute_command("ZADD", name, *pieces, callback=integer_reply)

    def zcard(self, name):
        """
        Return the number of elements in the sorted set ``name``

        For more information check https://redis.io/commands/zcard
        """
        return self.execute_command("ZCARD", name, callback=integer_reply)

    def zcount(self, name, min, max):
        """
        Returns the number of elements in the sorted set at key ``name`` with
        a score between ``min`` and ``max``.

        For more information check https://redis.io/commands/zcount
        """
        return self.execute_command("ZCOUNT", name, min, max, callback=integer_reply)

    def zincrby(self, name, amount, value):
        """
        Increment the score of ``value`` in sorted set ``name`` by ``amount``

        For more information check https://redis.io/commands/zincrby
        """
        return self.execute_command(
            "ZINCRBY", name, amount, value, callback=float_reply
        )

    def zlexcount(self, name, min, max):
        """
        Return the number of items in the sorted set ``name`` between the
        lexicographical range ``min`` and ``max``.

        For more information check https://redis.io/commands/zlexcount
        """
        return self.execute_command(
            "ZLEXCOUNT", name, min, max, callback=integer_reply
        )

    def zrange(self, name, start, end):
        """
        Return a range of values from sorted set ``name`` between
        ``start`` and ``end`` sorted in ascending order.

        For more information check https://redis.io/commands/zrange
        """
        return self.execute_command(
            "ZRANGE", name, start, end, callback=multi_bulk_reply
        )

    def zrange_with_scores(self, name, start, end):
        "Like ``zrange``, returning ``ScoredMember`` pairs"
        return self.execute_command(
            "ZRANGE", name, start, end, "WITHSCORES", callback=scored_members_reply
        )

    def zrevrange(self, name, start, end):
        """
        Return a range of values from sorted set ``name`` between
        ``start`` and ``end`` sorted in descending order.

        For more information check https://redis.io/commands/zrevrange
        """
        return self.execute_command(
            "ZREVRANGE", name, start, end, callback=multi_bulk_reply
        )

    def zrevrange_with_scores(self, name, start, end):
        "Like ``zrevrange``, returning ``ScoredMember`` pairs"
        return self.execute_command(
            "ZREVRANGE", name, start, end, "WITHSCORES", callback=scored_members_reply
        )

    def _score_range(self, command, name, first, last, start, num, withscores):
        if (start is not None and num is None) or (num is not None and start is None):
            raise DataError("``start`` and ``num`` must both be specified")
        pieces = [command, name, first, last]
        if withscores:
            pieces.append("WITHSCORES")
        if start is not None and num is not None:
            pieces.extend(["LIMIT", start, num])
        callback = scored_members_reply if withscores else multi_bulk_reply
        return self.execute_command(*pieces, callback=callback)

    def zrangebyscore(self, name, min, max, start=None, num=None):
        """
        Return a range of values from the sorted set ``name`` with scores
        between ``min`` and ``max``.

        If ``start`` and ``num`` are specified, then return a slice
        of the range.

        For more information check https://redis.io/commands/zrangebyscore
        """
        return self._score_range("ZRANGEBYSCORE", name, min, max, start, num, False)

    def zrangebyscore_with_scores(self, name, min, max, start=None, num=None):
        """
        Like ``zrangebyscore``, returning a list of ``ScoredMember`` pairs.
        """
        return self._score_range("ZRANGEBYSCORE", name, min, max, start, num, True)

    def zrevrangebyscore(self, name, max, min, start=None, num=None):
        """
        Return a range of values from the sorted set ``name`` with scores
        between ``min`` and ``max`` in descending order.

        If ``start`` and ``num`` are specified, then return a slice
        of the range.

        For more information check https://redis.io/commands/zrevrangebyscore
        """
        return self._score_range("ZREVRANGEBYSCORE", name, max, min, start, num, False)

    def zrevrangebyscore_with_scores(self, name, max, min, start=None, num=None):
        """
        Like ``zrevrangebyscore``, returning a list of ``ScoredMember`` pairs.
        """
        return self._score_range("ZREVRANGEBYSCORE", name, max, min, start, num, True)

    def zrangebylex(self, name, min, max, start=None, num=None):
        """
        Return the lexicographical range of values from sorted set ``name``
        between ``min`` and ``max``.

        For more information check https://redis.io/commands/zrangebylex
        """
        if (start is not None and num is None) or (num is not None and start is None):
            raise DataError("``start`` and ``num`` must both be specified")
        pieces = ["ZRANGEBYLEX", name, min, max]
        if start is not None and num is not None:
            pieces.extend(["LIMIT", start, num])
        return self.execute_command(*pieces, callback=multi_bulk_reply)

    def zrevrangebylex(self, name, max, min, start=None, num=None):
        """
        Return the reversed lexicographical range of values from sorted set
        ``name`` between ``max`` and ``min``.

        For more information check https://redis.io/commands/zrevrangebylex
        """
        if (start is not None and num is None) or (num is not None and start is None):
            raise DataError("``start`` and ``num`` must both be specified")
        pieces = ["ZREVRANGEBYLEX", name, max, min]
        if start is not None and num is not None:
            pieces.extend(["LIMIT", start, num])
        return self.execute_command(*pieces, callback=multi_bulk_reply)

    def zrank(self, name, value):
        """
        Returns a 0-based value indicating the rank of ``value`` in sorted set
        ``name``

        For more information check https://redis.io/commands/zrank
        """
        return self.execute_command(
            "ZRANK", name, value, callback=optional_integer_reply
        )

    def zrevrank(self, name, value):
        """
        Returns a 0-based value indicating the descending rank of
        ``value`` in sorted set ``name``

        For more information check https://redis.io/commands/zrevrank
        """
        return self.execute_command(
            "ZREVRANK", name, value, callback=optional_integer_reply
        )

    def zrem(self, name, *values):
        """
        Remove member ``values`` from sorted set ``name``

        For more information check https://redis.io/commands/zrem
        """
        return self.execute_command("ZREM", name, *values, callback=integer_reply)

    def zremrangebyrank(self, name, min, max):
        """
        Remove all elements in the sorted set ``name`` with ranks between
        ``min`` and ``max``. Values are 0-based, ordered from smallest score
        to largest. Values can be negative indicating the highest scores.
        Returns the number of elements removed

        For more information check https://redis.io/commands/zremrangebyrank
        """
        return self.execute_command(
            "ZREMRANGEBYRANK", name, min, max, callback=integer_reply
        )

    def zremrangebyscore(self, name, min, max):
        """
        Remove all elements in the sorted set ``name`` with scores
        between ``min`` and ``max``. Returns the number of elements removed.

        For more information check https://redis.io/commands/zremrangebyscore
        """
        return self.execute_command(
            "ZREMRANGEBYSCORE", name, min, max, callback=integer_reply
        )

    def zremrangebylex(self, name, min, max):
        """
        Remove all elements in the sorted set ``name`` between the
        lexicographical range specified by ``min`` and ``max``.

        Returns the number of elements removed.

        For more information check https://redis.io/commands/zremrangebylex
        """
        return self.execute_command(
            "ZREMRANGEBYLEX", name, min, max, callback=integer_reply
        )

    def zinterstore(self, dest, keys, aggregate=None):
        """
        Intersect multiple sorted sets specified by ``keys`` into a new
        sorted set, ``dest``. Scores in the destination will be aggregated
        based on the ``aggregate``. This option defaults to SUM, where the
        score of an element is summed across the inputs where it exists.
        When this option is set to either MIN or MAX, the resulting set will
        contain the minimum or maximum score of an element across the inputs
        where it exists. ``keys`` can be a dict mapping each key to its
        weight.

        For more information check https://redis.io/commands/zinterstore
        """
        return self._zaggregate("ZINTERSTORE", dest, keys, aggregate)

    def zunionstore(self, dest, keys, aggregate=None):
        """
        Union multiple sorted sets specified by ``keys`` into
        a new sorted set, ``dest``. Scores in the destination will be
        aggregated based on the ``aggregate``, or SUM if none is provided.
        ``keys`` can be a dict mapping each key to its weight.

        For more information check https://redis.io/commands/zunionstore
        """
        return self._zaggregate("ZUNIONSTORE", dest, keys, aggregate)

    def _zaggregate(self, command, dest, keys, aggregate=None):
        if not keys:
            raise DataError(f"{command} requires at least one key")
        pieces = [command, dest, len(keys)]
        if isinstance(keys, dict):
            keys, weights = keys.keys(), keys.values()
        else:
            weights = None
        pieces.extend(keys)
        if weights:
            pieces.append("WEIGHTS")
            pieces.extend(weights)
        if aggregate:
            if str(aggregate).upper() not in ("SUM", "MIN", "MAX"):
                raise DataError("aggregate can be sum, min or max.")
            pieces.extend(["AGGREGATE", aggregate])
        return self.execute_command(*pieces, callback=integer_reply)

    def zscore(self, name, value):
        """
        Return the score of element ``value`` in sorted set ``name``

        For more information check https://redis.io/commands/zscore
        """
        return self.execute_command("ZSCORE", name, value, callback=float_reply)


class HyperlogCommands:
    def pfadd(self, name, *values):
        """
        Adds the specified elements to the specified HyperLogLog.

        For more information check https://redis.io/commands/pfadd
        """
        return self.execute_command("PFADD", name, *values, callback=boolean_reply)

    def pfcount(self, *sources):
        """
        Return the approximated cardinality of
        the set observed by the HyperLogLog at key(s).

        For more information check https://redis.io/commands/pfcount
        """
        return self.execute_command("PFCOUNT", *sources, callback=integer_reply)

    def pfmerge(self, dest, *sources):
        """
        Merge N different HyperLogLogs into a single one.

        For more information check https://redis.io/commands/pfmerge
        """
        return self.execute_command("PFMERGE", dest, *sources, callback=ok_reply)


class GeoCommands:
    def geoadd(self, name, values):
        """
        Add the specified geospatial items to the specified key identified
        by the ``name`` argument. The Geospatial items are given as ordered
        members of the ``values`` argument, each item or place is formed by
        the triad longitude, latitude and name.

        For more information check https://redis.io/commands/geoadd
        """
        if len(values) % 3 != 0:
            raise DataError("GEOADD requires places with lon, lat and name values")
        return self.execute_command("GEOADD", name, *values, callback=integer_reply)

    def geodist(self, name, place1, place2, unit=None):
        """
        Return the distance between ``place1`` and ``place2`` members of the
        ``name`` key.
        The units must be one of the following : m, km mi, ft. By default
        meters are used.

        For more information check https://redis.io/commands/geodist
        """
        pieces = [name, place1, place2]
        if unit and unit not in ("m", "km", "mi", "ft"):
            raise DataError("GEODIST invalid unit")
        elif unit:
            pieces.append(unit)
        return self.execute_command("GEODIST", *pieces, callback=geodist_reply)

    def geohash(self, name, *values):
        """
        Return the geo hash string for each item of ``values`` members of
        the specified key identified by the ``name`` argument.

        For more information check https://redis.io/commands/geohash
        """
        return self.execute_command("GEOHASH", name, *values, callback=multi_bulk_reply)

    def geopos(self, name, *values):
        """
        Return the positions of each item of ``values`` as members of
        the specified key identified by the ``name`` argument. Each position
        is a ``GeoCoordinate``, or None for a missing member.

        For more information check https://redis.io/commands/geopos
        """
        return self.execute_command("GEOPOS", name, *values, callback=geopos_reply)

    def georadius(
        self,
        name,
        longitude,
        latitude,
        radius,
        unit=None,
        withdist=False,
        withcoord=False,
        withhash=False,
        count=None,
        sort=None,
    ):
        """
        Return the members of the specified key identified by the
        ``name`` argument which are within the borders of the area specified
        with the ``latitude`` and ``longitude`` location and the maximum
        distance from the center specified by the ``radius`` value.

        The units must be one of the following : m, km mi, ft. By default
        meters are used.

        ``withdist``, ``withcoord`` and ``withhash`` fill in the matching
        fields of each returned ``GeoRadiusMember``.

        ``count`` indicates to return the number of elements up to N.

        ``sort`` is ASC for nearest to farthest and DESC for farthest to
        nearest.

        For more information check https://redis.io/commands/georadius
        """
        return self._georadiusgeneric(
            "GEORADIUS",
            name,
            longitude,
            latitude,
            radius,
            unit=unit,
            withdist=withdist,
            withcoord=withcoord,
            withhash=withhash,
            count=count,
            sort=sort,
        )

    def georadiusbymember(
        self,
        name,
        member,
        radius,
        unit=None,
        withdist=False,
        withcoord=False,
        withhash=False,
        count=None,
        sort=None,
    ):
        """
        This command is exactly like ``georadius`` with the sole difference
        that instead of taking, as the center of the area to query, a longitude
        and latitude value, it takes the name of a member already existing
        inside the geospatial index represented by the sorted set.

        For more information check https://redis.io/commands/georadiusbymember
        """
        return self._georadiusgeneric(
            "GEORADIUSBYMEMBER",
            name,
            member,
            radius,
            unit=unit,
            withdist=withdist,
            withcoord=withcoord,
            withhash=withhash,
            count=count,
            sort=sort,
        )

    def _georadiusgeneric(
        self, command, *args, unit, withdist, withcoord, withhash, count, sort
    ):
        pieces = list(args)
        if unit and unit not in ("m", "km", "mi", "ft"):
            raise DataError("GEORADIUS invalid unit")
        pieces.append(unit or "m")

        for flag, keyword in (
            (withdist, "WITHDIST"),
            (withcoord, "WITHCOORD"),
            (withhash, "WITHHASH"),
        ):
            if flag:
                pieces.append(keyword)

        if count is not None:
            pieces.extend(["COUNT", count])

        if sort:
            if sort not in ("ASC", "DESC"):
                raise DataError("GEORADIUS invalid sort")
            pieces.append(sort)

        callback = partial(
            georadius_reply,
            withdist=bool(withdist),
            withhash=bool(withhash),
            withcoord=bool(withcoord),
        )
        return self.execute_command(command, *pieces, callback=callback)


class PubSubCommands:
    def publish(self, channel, message):
        """
        Publish ``message`` on ``channel``.
        Returns the number of subscribers the message was delivered to.

        For more information check https://redis.io/commands/publish
        """
        return self.execute_command("PUBLISH", channel, message, callback=integer_reply)

    def pubsub_channels(self, pattern="*"):
        """
        Return a list of channels that have at least one subscriber

        For more information check https://redis.io/commands/pubsub-channels
        """
        return self.execute_command(
            "PUBSUB CHANNELS", pattern, callback=multi_bulk_reply
        )


class ScriptCommands:
    """
    Lua scripting. Scripts may run for a while, so their replies are read
    without a deadline.
    """

    def eval(self, script, numkeys, *keys_and_args):
        """
        Execute the Lua ``script``, specifying the ``numkeys`` the script
        will touch and the key names and argument values in ``keys_and_args``.
        Returns the result of the script converted to plain Python values.

        For more information check https://redis.io/commands/eval
        """
        return self.execute_command(
            "EVAL", script, numkeys, *keys_and_args, callback=python_reply, blocking=True
        )

    def evalsha(self, sha, numkeys, *keys_and_args):
        """
        Use the ``sha`` to execute a Lua script already registered via EVAL
        or SCRIPT LOAD. Specify the ``numkeys`` the script will touch and the
        key names and argument values in ``keys_and_args``. Returns the result
        of the script.

        For more information check https://redis.io/commands/evalsha
        """
        return self.execute_command(
            "EVALSHA", sha, numkeys, *keys_and_args, callback=python_reply, blocking=True
        )

    def script_exists(self, *args):
        """
        Check if a script exists in the script cache by specifying the SHAs of
        each script as ``args``. Returns a list of boolean values indicating if
        if each already script exists in the cache.

        For more information check https://redis.io/commands/script-exists
        """
        return self.execute_command("SCRIPT EXISTS", *args, callback=bool_list_reply)

    def script_flush(self):
        """
        Flush all scripts from the script cache.

        For more information check https://redis.io/commands/script-flush
        """
        return self.execute_command("SCRIPT FLUSH", callback=ok_reply)

    def script_load(self, script):
        """
        Load a Lua ``script`` into the script cache. Returns the SHA.

        For more information check https://redis.io/commands/script-load
        """
        return self.execute_command("SCRIPT LOAD", script, callback=string_reply)


class ManagementCommands:
    """
    Redis management commands
    """

    def auth(self, password, username=None):
        """
        Authenticates the user. If you do not pass username, Redis will try to
        authenticate for the "default" user.

        For more information check https://redis.io/commands/auth
        """
        pieces = []
        if username is not None:
            pieces.append(username)
        pieces.append(password)
        return self.execute_command("AUTH", *pieces, callback=ok_reply)

    def ping(self, message=None):
        """
        Ping the Redis server. Returns ``PONG``, or ``message`` when given.

        For more information check https://redis.io/commands/ping
        """
        if message is None:
            return self.execute_command("PING", callback=status_reply)
        return self.execute_command("PING", message, callback=bulk_reply)

    def echo(self, value):
        """
        Echo the string back from the server

        For more information check https://redis.io/commands/echo
        """
        return self.execute_command("ECHO", value, callback=bulk_reply)

    def select(self, index):
        """
        Select the Redis logical database at index. Once the server accepts
        it the connection remembers the index, so a reconnect selects it
        again.

        For more information check https://redis.io/commands/select
        """
        connection = self.connection

        def selected(reply, encoder):
            ok_reply(reply, encoder)
            connection.db = int(index)
            return True

        return self.execute_command("SELECT", index, callback=selected)

    def quit(self):
        """
        Ask the server to close the connection.

        For more information check https://redis.io/commands/quit
        """
        return self.execute_command("QUIT", callback=ok_reply)

    def dbsize(self):
        """
        Returns the number of keys in the current database

        For more information check https://redis.io/commands/dbsize
        """
        return self.execute_command("DBSIZE", callback=integer_reply)

    def flushall(self):
        """
        Delete all keys in all databases on the current host.

        For more information check https://redis.io/commands/flushall
        """
        return self.execute_command("FLUSHALL", callback=ok_reply)

    def flushdb(self):
        """
        Delete all keys in the current database.

        For more information check https://redis.io/commands/flushdb
        """
        return self.execute_command("FLUSHDB", callback=ok_reply)

    def info(self, section=None):
        """
        Returns a dictionary containing information about the Redis server

        The ``section`` option can be used to select a specific section
        of information

        For more information check https://redis.io/commands/info
        """
        if section is None:
            return self.execute_command("INFO", callback=info_reply)
        return self.execute_command("INFO", section, callback=info_reply)

    def config_get(self, pattern="*"):
        """
        Return a dictionary of configuration based on the ``pattern``

        For more information check https://redis.io/commands/config-get
        """
        return self.execute_command("CONFIG GET", pattern, callback=config_reply)

    def config_set(self, name, value):
        """Set config item ``name`` with ``value``

        For more information check https://redis.io/commands/config-set
        """
        return self.execute_command("CONFIG SET", name, value, callback=ok_reply)

    def lastsave(self):
        """
        Return a Python datetime object representing the last time the
        Redis database was saved to disk

        For more information check https://redis.io/commands/lastsave
        """
        return self.execute_command("LASTSAVE", callback=_timestamp_reply)

    def save(self):
        """
        Tell the Redis server to save its data to disk,
        blocking until the save is complete

        For more information check https://redis.io/commands/save
        """
        return self.execute_command("SAVE", callback=ok_reply, blocking=True)

    def bgsave(self):
        """
        Tell the Redis server to save its data to disk.  Unlike save(),
        this method is asynchronous and returns immediately.

        For more information check https://redis.io/commands/bgsave
        """
        return self.execute_command("BGSAVE", callback=status_reply)

    def bgrewriteaof(self):
        """
        Tell the Redis server to rewrite the AOF file from data in memory.

        For more information check https://redis.io/commands/bgrewriteaof
        """
        return self.execute_command("BGREWRITEAOF", callback=status_reply)

    def cluster_slots(self):
        """
        Return the slot ranges of a cluster as ``ClusterSlot`` entries, each
        with its master and replica nodes.

        For more information check https://redis.io/commands/cluster-slots
        """
        return self.execute_command("CLUSTER SLOTS", callback=cluster_slots_reply)

    def slowlog_get(self, num=None):
        """
        Get the entries from the slowlog. If ``num`` is specified, get the
        most recent ``num`` items.

        For more information check https://redis.io/commands/slowlog-get
        """
        args = ["SLOWLOG GET"]
        if num is not None:
            args.append(num)
        return self.execute_command(*args, callback=slowlog_reply)

    def slowlog_len(self):
        """
        Get the number of items in the slowlog

        For more information check https://redis.io/commands/slowlog-len
        """
        return self.execute_command("SLOWLOG LEN", callback=integer_reply)

    def slowlog_reset(self):
        """
        Remove all items in the slowlog

        For more information check https://redis.io/commands/slowlog-reset
        """
        return self.execute_command("SLOWLOG RESET", callback=ok_reply)

    def object_encoding(self, key):
        "Return the internal encoding of the value at ``key``"
        return self.execute_command("OBJECT ENCODING", key, callback=string_reply)

    def object_refcount(self, key):
        "Return the reference count of the value at ``key``"
        return self.execute_command(
            "OBJECT REFCOUNT", key, callback=optional_integer_reply
        )

    def object_idletime(self, key):
        "Return the number of seconds since the value at ``key`` was last used"
        return self.execute_command(
            "OBJECT IDLETIME", key, callback=optional_integer_reply
        )


def _timestamp_reply(reply, encoder):
    return datetime.datetime.fromtimestamp(integer_reply(reply, encoder))


class CoreCommands(
    BasicKeyCommands,
    HashCommands,
    HyperlogCommands,
    ListCommands,
    ScanCommands,
    SetCommands,
    SortedSetCommands,
    GeoCommands,
    PubSubCommands,
    ScriptCommands,
    ManagementCommands,
):
    """
    A class containing all of the implemented redis commands. This class is
    to be used as a mixin for the synchronous client, pipeline and
    transaction.
    """
