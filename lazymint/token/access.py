from lazymint.db.driver import ContractDriver
from lazymint.db.orm import Hash
from lazymint.token.ownership import validate_holder, is_valid_holder
from lazymint import config


def owner_only(caller, current_owner, item_id):
    return caller is not None and caller == current_owner


class Approvals:
    """
    Default authorization collaborator. The owner may always move an item; so may
    the account approved for that single item and any operator the owner
    approved for all of its items.

    A single item approval remembers who granted it and only counts while that
    account still owns the item, so an approval made by a former default holder
    does not carry over to the next one.

    Instances are callable with the (caller, current_owner, item_id) signature the
    token expects of an authorization check.
    """
    def __init__(self, contract: str, driver: ContractDriver):
        self.approvals = Hash(contract, config.APPROVALS_KEY, driver=driver)
        self.operators = Hash(contract, config.OPERATORS_KEY, driver=driver, default_value=False)

    def approve(self, owner, spender, item_id):
        validate_holder(owner)
        validate_holder(spender)
        self.approvals[item_id] = {'owner': owner, 'spender': spender}

    def revoke(self, item_id):
        if item_id in self.approvals:
            del self.approvals[item_id]

    def get_approved(self, item_id, owner):
        approval = self.approvals[item_id]
        if approval is None or approval['owner'] != owner:
            return None
        return approval['spender']

    def set_approval_for_all(self, owner, operator, approved):
        validate_holder(owner)
        validate_holder(operator)

        if approved:
            self.operators[owner, operator] = True
        elif (owner, operator) in self.operators:
            del self.operators[owner, operator]

    def is_approved_for_all(self, owner, operator):
        if not is_valid_holder(owner) or not is_valid_holder(operator):
            return False
        return self.operators[owner, operator] is True

    def __call__(self, caller, current_owner, item_id):
        if owner_only(caller, current_owner, item_id):
            return True

        if not is_valid_holder(caller):
            return False

        return self.get_approved(item_id, current_owner) == caller or self.is_approved_for_all(current_owner, caller)
