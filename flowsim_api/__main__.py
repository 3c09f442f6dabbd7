"""Entry point: python -m flowsim_api"""

import uvicorn

from flowsim.config import API_HOST, API_PORT

if __name__ == "__main__":
    uvicorn.run("flowsim_api.main:app", host=API_HOST, port=API_PORT)
