from contextlib import contextmanager

from lazymint.db.driver import ContractDriver
from lazymint.db.orm import Variable
from lazymint.exceptions import AlreadyExists, BurnDisabled, NotAuthorized, OwnerMismatch
from lazymint.execution.guard import ReentrancyGuard, nonreentrant
from lazymint.logger import get_logger
from lazymint.token.access import Approvals
from lazymint.token.events import EventHub, TRANSFER, DEFAULT_HOLDER_CHANGED, APPROVAL, APPROVAL_FOR_ALL
from lazymint.token.ledger import BalanceLedger
from lazymint.token.metadata import TokenMetadata
from lazymint.token.ownership import OwnershipStore, validate_holder, validate_item
from lazymint import config

log = get_logger('Token')


class SparseOwnershipToken:
    """
    Non-fungible token where every item belongs to the default holder unless
    it has been transferred elsewhere.

    Minting to the default holder never writes an ownership entry, and moving
    the default role to another account moves the balance of every implicitly
    owned item in one step.

    Every mutating operation is all-or-nothing: it runs under the instance's
    reentrancy guard and inside a storage savepoint that is reverted when the
    operation raises. With ``auto_commit`` the surviving writes are committed to
    the backing driver before the guard is released.

    :param driver: Storage for this token. Several tokens can share a driver as
                   long as their contract names differ.
    :param default_holder: Initial default holder. Required the first time a
                           contract namespace is used, ignored afterwards.
    :param authorization: Callable (caller, current_owner, item_id) -> bool.
                          Defaults to a storage backed Approvals instance.
    """
    def __init__(self, driver: ContractDriver, default_holder=None, contract=config.DEFAULT_CONTRACT_NAME,
                 authorization=None, events=None, auto_commit=True):
        self.driver = driver
        self.contract = contract
        self.auto_commit = auto_commit

        self.ownership = OwnershipStore(contract, driver)
        self.ledger = BalanceLedger(contract, driver)
        self.metadata = TokenMetadata(contract, driver)
        self._total_minted = Variable(contract, config.TOTAL_MINTED_KEY, driver=driver, t=int, default_value=0)

        self.authorization = authorization if authorization is not None else Approvals(contract, driver)
        self.events = events if events is not None else EventHub()

        self._guard = ReentrancyGuard()

        stored = self.ownership.default_holder
        if stored is None:
            with self._guard, self._transaction():
                self.ownership.initialize(default_holder)
            log.info('Initialized {} with default holder {}'.format(contract, default_holder))
        elif default_holder is not None and default_holder != stored:
            log.warning('{} already has default holder {}, ignoring {}'.format(contract, stored, default_holder))

    @contextmanager
    def _transaction(self):
        savepoint = self.driver.savepoint()
        try:
            yield
            if self.auto_commit:
                self.driver.commit()
        except Exception as e:
            self.driver.revert(savepoint)
            log.debug('Reverted {}: {}'.format(self.contract, e))
            raise

        self.driver.release(savepoint)

    def commit(self):
        self.driver.commit()

    def rollback(self):
        self.driver.rollback()

    # Queries

    @property
    def default_holder(self):
        return self.ownership.default_holder

    @property
    def name(self):
        return self.metadata.name

    @property
    def symbol(self):
        return self.metadata.symbol

    def owner_of(self, item_id):
        return self.ownership.resolve(item_id)

    def balance_of(self, holder) -> int:
        return self.ledger.balance_of(holder)

    def total_supply(self) -> int:
        return self._total_minted.get()

    def exists(self, item_id) -> bool:
        validate_item(item_id)
        return self.ownership.exists(item_id)

    def overrides(self):
        return self.ownership.overrides()

    def override_count(self):
        return self.ownership.override_count()

    def token_uri(self, item_id):
        self.ownership.resolve(item_id)
        return self.metadata.token_uri(item_id)

    # Mutations

    def mint(self, to, item_id):
        with self._guard, self._transaction():
            validate_item(item_id)

            if self.ownership.exists(item_id):
                raise AlreadyExists(item_id=item_id)

            validate_holder(to)

            self.ownership.mark_minted(item_id)
            self.ownership.set_override(item_id, to)
            self.ledger.credit(to, 1)
            self._total_minted.set(self._total_minted.get() + 1)

        log.debug('Minted {} to {}'.format(item_id, to))
        self.events.emit(TRANSFER, sender=None, to=to, item_id=item_id)

    def transfer(self, sender, to, item_id, caller):
        with self._guard, self._transaction():
            owner = self.ownership.resolve(item_id)

            if owner != sender:
                raise OwnerMismatch(item_id=item_id, expected=sender, actual=owner)

            validate_holder(to)

            if not self.authorization(caller, owner, item_id):
                raise NotAuthorized(caller=caller, item_id=item_id)

            if isinstance(self.authorization, Approvals):
                self.authorization.revoke(item_id)

            self.ownership.set_override(item_id, to)
            self.ledger.debit(sender, 1)
            self.ledger.credit(to, 1)

        log.debug('Transferred {} from {} to {}'.format(item_id, sender, to))
        self.events.emit(TRANSFER, sender=sender, to=to, item_id=item_id)

    def set_default_holder(self, new_holder):
        with self._guard, self._transaction():
            validate_holder(new_holder)

            previous = self.ownership.default_holder
            if new_holder == previous:
                return

            self.ownership.migrate_default_holder(new_holder)
            moved = self.ledger.on_migrate_default_holder(previous, new_holder)

        log.info('Default holder of {} changed from {} to {}, {} items moved'.format(
            self.contract, previous, new_holder, moved
        ))
        self.events.emit(DEFAULT_HOLDER_CHANGED, previous=previous, current=new_holder)

    def burn(self, item_id):
        raise BurnDisabled(item_id=item_id)

    @nonreentrant
    def set_metadata(self, name=None, symbol=None, base_uri=None):
        with self._transaction():
            self.metadata.configure(name=name, symbol=symbol, base_uri=base_uri)

    # Approvals

    def _approvals(self):
        if not isinstance(self.authorization, Approvals):
            raise TypeError('Authorization {} does not keep approvals'.format(self.authorization))
        return self.authorization

    def approve(self, caller, spender, item_id):
        approvals = self._approvals()

        with self._guard, self._transaction():
            owner = self.ownership.resolve(item_id)

            if caller != owner and not approvals.is_approved_for_all(owner, caller):
                raise NotAuthorized(caller=caller, item_id=item_id)

            approvals.approve(owner, spender, item_id)

        self.events.emit(APPROVAL, owner=owner, spender=spender, item_id=item_id)

    def get_approved(self, item_id):
        owner = self.ownership.resolve(item_id)
        return self._approvals().get_approved(item_id, owner)

    def set_approval_for_all(self, caller, operator, approved):
        approvals = self._approvals()

        with self._guard, self._transaction():
            approvals.set_approval_for_all(caller, operator, approved)

        self.events.emit(APPROVAL_FOR_ALL, owner=caller, operator=operator, approved=approved)

    def is_approved_for_all(self, owner, operator):
        return self._approvals().is_approved_for_all(owner, operator)
