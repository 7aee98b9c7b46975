"""Application entry point.

Runs the FastAPI application defined in ``app.main`` under uvicorn.
"""

import uvicorn

if __name__ == "__main__":
    uvicorn.run("app.main:app", host="localhost", port=8000, reload=True)
