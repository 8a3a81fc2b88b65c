class LazyMintError(Exception):
    """
    The base exception for lazymint. The fmt directive
    will be overloaded by the inheriting classes

    :ivar msg: The message associated with the error
    """
    fmt = 'An unspecified error occurred'

    def __init__(self, **kwargs):
        msg = self.fmt.format(**kwargs)
        Exception.__init__(self, msg)
        self.kwargs = kwargs


class DriverNotFound(LazyMintError):
    """
    Could not find the specified storage driver when
    looking for it

    :ivar driver: The name of the storage driver the
                  the user attempted to load
    :ivar known_drivers: The list of known drivers
                         currently supported
    """
    fmt = "Unknown storage driver '{driver}', known drivers '{known_drivers}'"


class NotFound(LazyMintError):
    """
    The referenced item was never minted

    :ivar item_id: The identifier looked up
    """
    fmt = "Item '{item_id}' does not exist"


class AlreadyExists(LazyMintError):
    """
    Attempted to mint an identifier that is already minted

    :ivar item_id: The duplicate identifier
    """
    fmt = "Item '{item_id}' has already been minted"


class InvalidItem(LazyMintError):
    """
    Item identifiers are non-negative integers

    :ivar item_id: The rejected identifier
    """
    fmt = "Invalid item identifier '{item_id}'"


class InvalidHolder(LazyMintError):
    """
    The holder is a null holder or not a string

    :ivar holder: The rejected holder
    """
    fmt = "Invalid holder '{holder}'"


class OwnerMismatch(LazyMintError):
    """
    The sender named in a transfer does not own the item

    :ivar item_id: The item being transferred
    :ivar expected: The owner claimed by the request
    :ivar actual: The resolved owner
    """
    fmt = "Item '{item_id}' is owned by '{actual}', not '{expected}'"


class NotAuthorized(LazyMintError):
    """
    The caller is not permitted to move the item

    :ivar caller: The account attempting the transfer
    :ivar item_id: The item being transferred
    """
    fmt = "Caller '{caller}' is not authorized to transfer item '{item_id}'"


class Reentrant(LazyMintError):
    fmt = 'Reentrant call rejected, a mutating operation is already in progress'


class InsufficientBalance(LazyMintError):
    """
    Internal invariant breach. A debit would make a balance negative.
    """
    fmt = "Balance of '{holder}' is {balance}, cannot debit {amount}"


class BurnDisabled(LazyMintError):
    fmt = "Burning is disabled, item '{item_id}' cannot be burned"
