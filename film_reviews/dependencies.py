from fastapi import Request
from .catalog import CatalogStore
from .ledger import ReviewLedger


# Both stores are built once in the lifespan and shared by every request
def get_catalog(request: Request) -> CatalogStore:
    return request.app.state.catalog

def get_ledger(request: Request) -> ReviewLedger:
    return request.app.state.ledger
