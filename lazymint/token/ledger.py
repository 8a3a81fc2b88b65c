from lazymint.db.driver import ContractDriver
from lazymint.db.orm import Hash
from lazymint.exceptions import InsufficientBalance
from lazymint.logger import get_logger
from lazymint.token.ownership import is_valid_holder
from lazymint import config

log = get_logger('Ledger')


class BalanceLedger:
    """
    Per holder item counts. Mirrors every ownership change, including the bulk
    move of implicitly owned items when the default holder changes.
    """
    def __init__(self, contract: str, driver: ContractDriver):
        self.balances = Hash(contract, config.BALANCES_KEY, driver=driver, default_value=0)

    def balance_of(self, holder) -> int:
        if not is_valid_holder(holder):
            return 0
        return self.balances[holder]

    def credit(self, holder, n=1):
        self.balances[holder] += n

    def debit(self, holder, n=1):
        balance = self.balances[holder]

        if balance < n:
            log.error('Balance of {} is {}, refusing to debit {}'.format(holder, balance, n))
            raise InsufficientBalance(holder=holder, balance=balance, amount=n)

        self.balances[holder] = balance - n

    def on_migrate_default_holder(self, old_default, new_default):
        delta = self.balances[old_default]

        self.balances[old_default] -= delta
        self.balances[new_default] += delta

        return delta

    def all(self):
        return self.balances.items()
