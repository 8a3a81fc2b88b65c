import os

DELIMITER = ':'
INDEX_SEPARATOR = '.'

MAX_HASH_DIMENSIONS = 16

# Item ids stay convertible to decimal under the interpreter default int/str limit (4300 digits)
MAX_ITEM_BITS = 14000

# Existence of minted items is packed into words of this many bits
MINTED_WORD_BITS = 256

ZERO_HOLDER = '0' * 64
NULL_HOLDERS = {None, '', ZERO_HOLDER}

DEFAULT_CONTRACT_NAME = 'token'

DEFAULT_HOLDER_KEY = 'default_holder'
TOTAL_MINTED_KEY = 'total_minted'
OWNERS_KEY = 'owners'
BALANCES_KEY = 'balances'
MINTED_KEY = 'minted'
APPROVALS_KEY = 'approvals'
OPERATORS_KEY = 'operators'
METADATA_KEY = '__metadata__'

# Storage
DRIVER = os.getenv('LAZYMINT_DRIVER', 'memory')
KNOWN_DRIVERS = ('memory', 'fs', 'mongo')

STORAGE_HOME = os.getenv('LAZYMINT_STORAGE_HOME', os.path.join(os.path.expanduser('~'), '.lazymint'))
FILE_EXT = '.json'
MISC_FILENAME = '__misc'

MONGO_URL = os.getenv('LAZYMINT_MONGO_URL', 'mongodb://localhost:27017')
MONGO_DB = os.getenv('LAZYMINT_MONGO_DB', 'lazymint')
MONGO_COLLECTION = os.getenv('LAZYMINT_MONGO_COLLECTION', 'state')
