import json
from urllib.parse import quote, unquote
from lazymint.config import INDEX_SEPARATOR

# Integers outside of this range are stored as strings so that item identifiers and minted
# bitmask words survive storage backends limited to 8 byte integers.
MONGO_MIN_INT = -(2 ** 63)
MONGO_MAX_INT = 2 ** 63 - 1

BIG_INT_KEY = '__big_int__'


def encode_int(value: int):
    if MONGO_MIN_INT < value and value < MONGO_MAX_INT:
        return value

    return {
        BIG_INT_KEY: str(value)
    }


def _encode_list(data: list):
    l = []
    for i in data:
        if isinstance(i, dict):
            l.append(encode_ints_in_dict(i))
        elif isinstance(i, (list, tuple)):
            l.append(_encode_list(i))
        elif isinstance(i, int) and not isinstance(i, bool):
            l.append(encode_int(i))
        else:
            l.append(i)
    return l


def encode_ints_in_dict(data: dict):
    d = dict()
    for k, v in data.items():
        if isinstance(v, int) and not isinstance(v, bool):
            d[k] = encode_int(v)
        elif isinstance(v, dict):
            d[k] = encode_ints_in_dict(v)
        elif isinstance(v, (list, tuple)):
            d[k] = _encode_list(v)
        else:
            d[k] = v

    return d


def encode(data):
    """ NOTE:
    json cannot hook the encoding of builtin types, so big integers are
    preprocessed before dumping.
    """
    if isinstance(data, int) and not isinstance(data, bool):
        data = encode_int(data)
    elif isinstance(data, dict):
        data = encode_ints_in_dict(data)
    elif isinstance(data, (list, tuple)):
        data = _encode_list(data)

    return json.dumps(data, separators=(',', ':'))


def as_object(d):
    if BIG_INT_KEY in d:
        return int(d[BIG_INT_KEY])
    return dict(d)


# Decode has a hook for JSON objects, which are just Python dictionaries.
def decode(data):
    if data is None:
        return None

    if isinstance(data, bytes):
        data = data.decode()

    try:
        return json.loads(data, object_hook=as_object)
    except json.decoder.JSONDecodeError:
        return None


def escape_key(part: str):
    """
    Percent-encodes a single hash key component so that holders containing the
    key delimiter or index separator can still be stored. Plain identifiers are
    left untouched.
    """
    return quote(part, safe='').replace(INDEX_SEPARATOR, '%2E')


def unescape_key(part: str):
    return unquote(part)
