"""
Declarative description of the ``sp`` schema.

Importing this package registers every table on ``Base.metadata``.  The
wrapper itself never creates tables; the models document the contract and
let tests provision a database.
"""

from spdb.models.user import User          # noqa: F401
from spdb.models.user_ban import UserBan   # noqa: F401
from spdb.models.ip_ban import IpBan       # noqa: F401
from spdb.models.user_ip import UserIp     # noqa: F401
