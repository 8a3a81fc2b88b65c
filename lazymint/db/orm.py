from lazymint.db.driver import ContractDriver
from lazymint.db.encoder import escape_key, unescape_key
from lazymint import config


class Datum:
    def __init__(self, contract, name, driver: ContractDriver):
        self._driver = driver
        self._key = self._driver.make_key(contract, name)


class Variable(Datum):
    def __init__(self, contract, name, driver: ContractDriver, t=None, default_value=None):
        self._type = None

        if isinstance(t, type):
            self._type = t

        self._default_value = default_value

        super().__init__(contract, name, driver=driver)

    def set(self, value):
        if self._type is not None:
            assert isinstance(value, self._type), 'Wrong type passed to variable! Expected {}, got {}.'.format(
                self._type,
                type(value)
            )

        self._driver.set(self._key, value)

    def get(self):
        value = self._driver.get(self._key)
        if value is None:
            return self._default_value
        return value


class Hash(Datum):
    def __init__(self, contract, name, driver: ContractDriver, default_value=None):
        super().__init__(contract, name, driver=driver)
        self._delimiter = config.DELIMITER
        self._default_value = default_value

    def _full_key(self, key):
        return '{}{}{}'.format(self._key, self._delimiter, key)

    def _set(self, key, value):
        self._driver.set(self._full_key(key), value)

    def _get(self, item):
        value = self._driver.get(self._full_key(item))

        # Add Python defaultdict behavior for easier bookkeeping
        if value is None:
            value = self._default_value

        return value

    def _delete(self, key):
        self._driver.delete(self._full_key(key))

    def _validate_key(self, key):
        if isinstance(key, tuple):
            assert len(key) <= config.MAX_HASH_DIMENSIONS, 'Too many dimensions ({}) for hash. Max is {}'.format(
                len(key), config.MAX_HASH_DIMENSIONS
            )

            for k in key:
                assert not isinstance(k, slice), 'Slices prohibited in hashes.'

            return self._delimiter.join(escape_key(str(k)) for k in key)

        return escape_key(str(key))

    def items(self):
        prefix = '{}{}'.format(self._key, self._delimiter)

        items = {}
        for k, v in self._driver.items(prefix=prefix).items():
            parts = tuple(unescape_key(p) for p in k[len(prefix):].split(self._delimiter))
            items[parts[0] if len(parts) == 1 else parts] = v

        return items

    def __setitem__(self, key, value):
        # handle multiple hashes differently
        key = self._validate_key(key)
        self._set(key, value)

    def __getitem__(self, key):
        key = self._validate_key(key)
        return self._get(key)

    def __delitem__(self, key):
        key = self._validate_key(key)
        self._delete(key)

    def __contains__(self, key):
        key = self._validate_key(key)
        return self._driver.get(self._full_key(key)) is not None
