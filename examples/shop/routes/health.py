"""GET /health, finished by per-method end middleware."""


def get(request, response, next):
    response.set_header("cache-control", "no-store")
    next()


def stamp(request, response, next):
    response.set_header("x-checked", "yes")
    next()


def finish(request, response, next):
    response.send("ok")


end_middleware = {"get": [stamp, finish]}
