# stockmarket/routes/simulator.py

from fastapi import APIRouter, Depends
from stockmarket import schemas
from stockmarket.dependencies import get_simulator
from stockmarket.simulator import PriceSimulator
from logger import logger

router = APIRouter(
    prefix="/api/simulator",
    tags=["simulator"]
)


@router.post("/trigger", response_model=schemas.MessageResponse)
def trigger_simulation(simulator: PriceSimulator = Depends(get_simulator)):
    """
    Runs one price simulation tick right away. Failures for individual
    stocks are logged by the simulator and do not fail the request.
    """
    logger.info("REST request to trigger price simulation")
    simulator.simulate_price_changes()
    return {"message": "Stock price simulation triggered successfully"}
