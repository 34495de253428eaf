"""Main router for API v1."""

from fastapi import APIRouter

from contract_studio.api.v1 import compilation, deploy, deployments, health, network, wallet

router = APIRouter(prefix="/v1")

# Include sub-routers
router.include_router(health.router, tags=["health"])
router.include_router(compilation.router, prefix="/compile", tags=["compile"])
router.include_router(deploy.router, prefix="/deploy", tags=["deploy"])
router.include_router(deployments.router, prefix="/deployments", tags=["deploy"])
router.include_router(network.router, prefix="/network", tags=["network"])
router.include_router(wallet.router, prefix="/wallet", tags=["wallet"])
