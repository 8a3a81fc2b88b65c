from lazymint.db.driver import ContractDriver, DRIVERS
from lazymint.exceptions import DriverNotFound
from lazymint.token.engine import SparseOwnershipToken
from lazymint.logger import get_logger
from lazymint import config

log = get_logger('Client')


def get_driver(name=config.DRIVER, **kwargs):
    driver_class = DRIVERS.get(name)
    if driver_class is None:
        raise DriverNotFound(driver=name, known_drivers=config.KNOWN_DRIVERS)

    log.debug('Using {} driver'.format(name))
    return driver_class(**kwargs)


class TokenClient:
    """
    Wires a storage driver to token instances. Tokens created from the same
    client share the driver and are told apart by their contract names.
    """
    def __init__(self, driver=None, driver_name=config.DRIVER, auto_commit=True, **driver_kwargs):
        if driver is None:
            driver = ContractDriver(driver=get_driver(driver_name, **driver_kwargs))
        elif not isinstance(driver, ContractDriver):
            driver = ContractDriver(driver=driver)

        self.raw_driver = driver
        self.auto_commit = auto_commit
        self._tokens = {}

    def get_token(self, contract=config.DEFAULT_CONTRACT_NAME, default_holder=None, **kwargs):
        token = self._tokens.get(contract)
        if token is None:
            token = SparseOwnershipToken(driver=self.raw_driver,
                                         default_holder=default_holder,
                                         contract=contract,
                                         auto_commit=self.auto_commit,
                                         **kwargs)
            self._tokens[contract] = token

        return token

    def get_contracts(self):
        contracts = set()
        for key in self.raw_driver.keys():
            if key.endswith(config.INDEX_SEPARATOR + config.DEFAULT_HOLDER_KEY):
                contracts.add(key.split(config.INDEX_SEPARATOR, 1)[0])
        return sorted(contracts)

    def flush(self):
        self.raw_driver.flush()
        self._tokens = {}
