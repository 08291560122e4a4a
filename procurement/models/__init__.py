from .access import ALL_FIRMS, PERMISSION_KEYS, UserAccess
from .events import StageEvent
from .indents import Indent, VendorQuote
from .issues import StoreIssue
from .kitting import FullKitting
from .lifts import Lift
from .master import MasterRecord
from .orders import PurchaseOrderLine
from .tally import TallyEntry

__all__ = [
    "ALL_FIRMS",
    "PERMISSION_KEYS",
    "UserAccess",
    "StageEvent",
    "Indent",
    "VendorQuote",
    "StoreIssue",
    "FullKitting",
    "Lift",
    "MasterRecord",
    "PurchaseOrderLine",
    "TallyEntry",
]
