from lazymint.token.engine import SparseOwnershipToken
from lazymint.token.access import Approvals, owner_only
from lazymint.token.events import EventHub
