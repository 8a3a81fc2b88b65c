from lazymint.db.encoder import encode, decode
from lazymint import config
from lazymint.logger import get_logger
from pathlib import Path
import json
import os
import re
import shutil
import pymongo

log = get_logger('Driver')

# DB maps bytes to bytes
# Driver maps string to python object


class Driver:
    """
    Interface every storage backend implements. Values handed to set are python
    objects; backends store them encoded and decode them on the way out. Setting
    None is the same as deleting the key.
    """
    def get(self, item: str):
        raise NotImplementedError

    def set(self, key: str, value):
        raise NotImplementedError

    def delete(self, key: str):
        raise NotImplementedError

    def iter(self, prefix: str, length=0):
        raise NotImplementedError

    def keys(self):
        raise NotImplementedError

    def flush(self):
        raise NotImplementedError

    def __getitem__(self, item: str):
        value = self.get(item)
        if value is None:
            raise KeyError(item)
        return value

    def __setitem__(self, key: str, value):
        self.set(key, value)

    def __delitem__(self, key: str):
        self.delete(key)


class InMemDriver(Driver):
    def __init__(self):
        self.db = {}

    def get(self, item: str):
        res = self.db.get(item.encode())
        if res is None:
            return None
        return decode(res)

    def set(self, key: str, value):
        if value is None:
            self.delete(key)
        else:
            self.db[key.encode()] = encode(value).encode()

    def delete(self, key: str):
        self.db.pop(key.encode(), None)

    def iter(self, prefix: str, length=0):
        p = prefix.encode()

        l = []
        for k in sorted(self.db.keys()):
            if k.startswith(p):
                l.append(k.decode())
            if 0 < length <= len(l):
                break

        return l

    def keys(self):
        return sorted([k.decode() for k in self.db.keys()])

    def flush(self):
        self.db.clear()


class FSDriver(Driver):
    """
    Stores every contract namespace in its own JSON file. Keys without an index
    separator land in a shared misc file under the run state directory.
    """
    def __init__(self, root=None):
        self.root = Path(root) if root is not None else Path(config.STORAGE_HOME)
        log.debug(f"Using root {self.root}")
        self.contract_state = self.root.joinpath("contract_state")
        self.run_state = self.root.joinpath("run_state")

        self.__build_directories()

    def __build_directories(self):
        self.contract_state.mkdir(exist_ok=True, parents=True)
        self.run_state.mkdir(exist_ok=True, parents=True)

    def __parse_key(self, key):
        if config.INDEX_SEPARATOR in key:
            filename, variable = key.split(config.INDEX_SEPARATOR, 1)
        else:
            filename, variable = config.MISC_FILENAME, key

        return filename, variable

    def __filename_to_path(self, filename):
        directory = self.run_state if filename.startswith("__") else self.contract_state
        return directory.joinpath(filename + config.FILE_EXT)

    def __load(self, filename):
        path = self.__filename_to_path(filename)
        if not path.is_file():
            return {}

        with open(path) as f:
            return json.load(f)

    def __dump(self, filename, contents):
        path = self.__filename_to_path(filename)

        if not contents:
            if path.is_file():
                path.unlink()
            return

        tmp = path.with_suffix(path.suffix + '.tmp')
        with open(tmp, 'w') as f:
            json.dump(contents, f, separators=(',', ':'), sort_keys=True)
        os.replace(tmp, path)

    def __key(self, filename, variable):
        if filename == config.MISC_FILENAME:
            return variable
        return filename + config.INDEX_SEPARATOR + variable

    def get(self, item: str):
        filename, variable = self.__parse_key(item)
        return decode(self.__load(filename).get(variable))

    def set(self, key, value):
        if value is None:
            self.delete(key)
            return

        filename, variable = self.__parse_key(key)
        contents = self.__load(filename)
        contents[variable] = encode(value)
        self.__dump(filename, contents)

    def delete(self, key):
        filename, variable = self.__parse_key(key)
        contents = self.__load(filename)
        if contents.pop(variable, None) is not None:
            self.__dump(filename, contents)

    def __get_files(self):
        files = [p.name for p in self.contract_state.iterdir()] + [p.name for p in self.run_state.iterdir()]
        return sorted(f[:-len(config.FILE_EXT)] for f in files if f.endswith(config.FILE_EXT))

    def iter(self, prefix="", length=0):
        keys = [k for k in self.keys() if k.startswith(prefix)]
        return keys if length == 0 else keys[:length]

    def keys(self):
        keys = []
        for filename in self.__get_files():
            keys.extend(self.__key(filename, variable) for variable in self.__load(filename).keys())

        keys.sort()
        return keys

    def flush(self):
        if self.run_state.is_dir():
            shutil.rmtree(self.run_state)
        if self.contract_state.is_dir():
            shutil.rmtree(self.contract_state)

        self.__build_directories()


class MongoDriver(Driver):
    # conn_str see https://www.mongodb.com/docs/manual/reference/connection-string/
    def __init__(self, conn_str=config.MONGO_URL, db=config.MONGO_DB, collection=config.MONGO_COLLECTION):
        self.client = pymongo.MongoClient(conn_str)
        self.db = self.client[db][collection]

    def get(self, item: str):
        v = self.db.find_one({"rawKey": item})
        if v is None:
            return None

        return decode(v["value"])

    def set(self, key, value):
        if value is None:
            self.delete(key)
            return

        self.db.update_one({"rawKey": key}, {"$set": {"value": encode(value)}}, upsert=True)

    def delete(self, key: str):
        self.db.delete_one({"rawKey": key})

    def iter(self, prefix: str, length=0):
        cur = self.db.find({"rawKey": {"$regex": f"^{re.escape(prefix)}"}})

        keys = []
        for entry in cur:
            keys.append(entry["rawKey"])
            if 0 < length <= len(keys):
                break

        keys.sort()
        return keys

    def keys(self):
        k = []
        for entry in self.db.find({}):
            k.append(entry["rawKey"])
        k.sort()
        return k

    def flush(self):
        self.db.delete_many({})


DRIVERS = {
    'memory': InMemDriver,
    'fs': FSDriver,
    'mongo': MongoDriver,
}


class CacheDriver:
    def __init__(self, driver=None):
        self.pending_writes = {}  # L2 cache, None marks a pending delete
        self.cache = {}  # L1 cache
        self.driver = driver if driver is not None else InMemDriver()  # L0

        self.pending_reads = {}

        # Undo log of (key, was_pending, previous_pending_value), newest last
        self.journal = []

    def find(self, key: str):
        if key in self.pending_writes:
            return self.pending_writes[key]

        value = self.cache.get(key)
        if value is not None:
            return value

        value = self.driver.get(key)
        if value is not None:
            self.cache[key] = value

        return value

    def get(self, key: str, save: bool = True):
        value = self.find(key)

        if save and key not in self.pending_reads:
            self.pending_reads[key] = value

        return value

    def set(self, key, value):
        if key not in self.pending_reads:
            self.get(key)

        self.journal.append((key, key in self.pending_writes, self.pending_writes.get(key)))
        self.pending_writes[key] = value

    def delete(self, key):
        self.set(key, None)

    def savepoint(self):
        return len(self.journal)

    def revert(self, savepoint):
        while len(self.journal) > savepoint:
            key, was_pending, previous = self.journal.pop()
            if was_pending:
                self.pending_writes[key] = previous
            else:
                self.pending_writes.pop(key, None)

    def release(self, savepoint):
        # Only the outermost savepoint can drop the undo log
        if savepoint == 0:
            self.journal.clear()

    def commit(self):
        try:
            for k, v in self.pending_writes.items():
                if v is None:
                    self.driver.delete(k)
                    self.cache.pop(k, None)
                else:
                    self.driver.set(k, v)
                    self.cache[k] = v
        except Exception as e:
            # Backends are not transactional, whatever was written before the failure stays written
            log.error('Commit failed, cache dropped: {}'.format(e))
            self.cache.clear()
            raise

        self.pending_writes.clear()
        self.pending_reads = {}
        self.journal.clear()

    def rollback(self):
        # Returns to disk state which should be whatever it was prior to any write sessions
        self.cache.clear()
        self.pending_reads = {}
        self.pending_writes.clear()
        self.journal.clear()

    def clear_pending_state(self):
        self.rollback()


class ContractDriver(CacheDriver):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.delimiter = config.INDEX_SEPARATOR

    def items(self, prefix=""):
        _items = {}
        deleted = set()

        for k, v in self.pending_writes.items():
            if k.startswith(prefix):
                if v is None:
                    deleted.add(k)
                else:
                    _items[k] = v

        for k in self.driver.iter(prefix=prefix):
            if k in _items or k in deleted:
                continue
            _items[k] = self.get(k, save=False)

        return _items

    def keys(self, prefix=""):
        return sorted(self.items(prefix).keys())

    def make_key(self, contract, variable):
        return self.delimiter.join((contract, variable))

    def flush(self):
        self.driver.flush()
        self.clear_pending_state()
