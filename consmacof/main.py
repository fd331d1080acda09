from fastapi import FastAPI
import logging
from fastapi.middleware.cors import CORSMiddleware

from . import __version__

app = FastAPI(title="Constrained SMACOF API",
              description="API for multidimensional scaling with polynomial constraints solved by SCIP",
              version=__version__)

logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "service": "consmacof",
        "version": __version__,
        "routes": ["/api/smacof/solve"],
    }


from .routers import smacof  # noqa: E402
app.include_router(smacof.router, prefix="/api/smacof", tags=["smacof"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("consmacof.main:app", host="0.0.0.0", port=8000)
