from lazymint.db.driver import ContractDriver
from lazymint.db.orm import Hash, Variable
from lazymint.exceptions import NotFound, InvalidHolder, InvalidItem
from lazymint.logger import get_logger
from lazymint import config

log = get_logger('Ownership')


def is_null_holder(holder):
    return holder in config.NULL_HOLDERS


def validate_holder(holder):
    if not isinstance(holder, str) or is_null_holder(holder):
        raise InvalidHolder(holder=holder)

    return holder


def is_valid_holder(holder):
    try:
        validate_holder(holder)
    except InvalidHolder:
        return False
    return True


def validate_item(item_id):
    if isinstance(item_id, bool) or not isinstance(item_id, int) or item_id < 0:
        raise InvalidItem(item_id=item_id)

    if item_id.bit_length() > config.MAX_ITEM_BITS:
        raise InvalidItem(item_id='<{}-bit integer>'.format(item_id.bit_length()))

    return item_id


class OwnershipStore:
    """
    Sparse ownership map with a single fallback holder.

    Items nobody ever moved have no entry in `owners`; they belong to whoever is
    the default holder at the time of the query. An entry is only kept while it
    points at someone other than the default holder.
    """
    def __init__(self, contract: str, driver: ContractDriver):
        self.owners = Hash(contract, config.OWNERS_KEY, driver=driver)
        self.minted = Hash(contract, config.MINTED_KEY, driver=driver, default_value=0)
        self._default_holder = Variable(contract, config.DEFAULT_HOLDER_KEY, driver=driver, t=str)

    @property
    def default_holder(self):
        return self._default_holder.get()

    def initialize(self, default_holder):
        validate_holder(default_holder)
        self._default_holder.set(default_holder)

    def exists(self, item_id) -> bool:
        word, bit = divmod(item_id, config.MINTED_WORD_BITS)
        return bool(self.minted[word] >> bit & 1)

    def mark_minted(self, item_id):
        word, bit = divmod(item_id, config.MINTED_WORD_BITS)
        self.minted[word] = self.minted[word] | (1 << bit)

    def resolve(self, item_id):
        validate_item(item_id)

        if not self.exists(item_id):
            raise NotFound(item_id=item_id)

        owner = self.owners[item_id]
        if owner is None:
            return self.default_holder
        return owner

    def set_override(self, item_id, holder):
        if holder == self.default_holder:
            if item_id in self.owners:
                del self.owners[item_id]
        else:
            self.owners[item_id] = holder

    def migrate_default_holder(self, new_holder):
        validate_holder(new_holder)

        previous = self.default_holder

        # Entries pointing at the new default holder become implicit ownership
        for item_id, owner in self.overrides().items():
            if owner == new_holder:
                del self.owners[item_id]

        self._default_holder.set(new_holder)
        log.debug('Default holder migrated from {} to {}'.format(previous, new_holder))

        return previous

    def overrides(self):
        return {int(k): v for k, v in self.owners.items().items()}

    def override_count(self):
        return len(self.owners.items())
