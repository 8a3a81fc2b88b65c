from lazymint.db.driver import ContractDriver
from lazymint.db.orm import Variable
from lazymint import config


class TokenMetadata:
    def __init__(self, contract: str, driver: ContractDriver):
        self._metadata = Variable(contract, config.METADATA_KEY, driver=driver, t=dict, default_value={})

    def configure(self, name=None, symbol=None, base_uri=None):
        metadata = dict(self._metadata.get())

        for key, value in (('name', name), ('symbol', symbol), ('base_uri', base_uri)):
            if value is not None:
                metadata[key] = value

        self._metadata.set(metadata)

    @property
    def name(self):
        return self._metadata.get().get('name', '')

    @property
    def symbol(self):
        return self._metadata.get().get('symbol', '')

    @property
    def base_uri(self):
        return self._metadata.get().get('base_uri', '')

    def token_uri(self, item_id):
        return '{}{}'.format(self.base_uri, item_id)
