from fastapi import APIRouter, HTTPException, Request


router = APIRouter()


@router.get('/observations')
def list_observations(request: Request):
    store = request.app.state.valuation_store
    rows = sorted(store.list_all(), key=lambda row: row.symbol)
    return {'items': [row.model_dump(mode='json') for row in rows]}


@router.get('/observations/{symbol}')
def get_observation(symbol: str, request: Request):
    observation = request.app.state.valuation_store.get_previous(symbol)
    if observation is None:
        raise HTTPException(status_code=404, detail='SYMBOL_NOT_OBSERVED')
    return observation.model_dump(mode='json')


@router.get('/metrics/poll')
def get_poll_metrics(request: Request):
    coordinator = request.app.state.poll_coordinator
    return {
        **coordinator.metrics(),
        'stored_symbols': len(request.app.state.valuation_store),
        'running': coordinator.running,
    }
