from idv.repositories.contracts import SourceRecordStore, AttemptLogStore, RegisteredClientStore
from idv.repositories.sql import SqlSourceRecordStore, SqlAttemptLogStore, SqlRegisteredClientStore

__all__ = [
    "SourceRecordStore", "AttemptLogStore", "RegisteredClientStore",
    "SqlSourceRecordStore", "SqlAttemptLogStore", "SqlRegisteredClientStore",
]
