"""Operation name API resources."""

import falcon.asgi

from warden.domain.exceptions import InvalidArgument
from warden.domain.value_objects import expand_operation_names


class OperationExpandResource:
    """GET /v1/operations/expand?name=... - operation names with all ancestors."""

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        names = req.get_param_as_list("name") or []
        try:
            items = expand_operation_names(names)
        except InvalidArgument as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        resp.media = {"items": items}
        resp.status = falcon.HTTP_200
