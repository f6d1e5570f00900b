from .catalog import DEFAULT_CATALOG, QueryCatalog, QueryKind
from .models import QueryResponse

__all__ = ["DEFAULT_CATALOG", "QueryCatalog", "QueryKind", "QueryResponse"]
