"""GET /products, POST /products."""

PRODUCTS = ["kettle", "teapot"]


def identify(request, response, next):
    request.state["user"] = request.headers.get("x-user", "guest")
    next()


middleware = [identify]


def get(request, response, next):
    response.send(", ".join(PRODUCTS))


async def post(request, response, next):
    response.send(f"created by {request.state['user']}", status=201)
