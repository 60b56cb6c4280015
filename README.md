# servicenest

The backend core of a home-services marketplace. Householders request
services, service providers accept them and quote a price, householders
approve a provider and leave reviews, and administrators manage the
catalogue and user accounts.

## Modules

- `servicenest.queries` – builders for the MySQL statements used by the
  application: `select_query`, `select_query_with_limit`, `insert_query`,
  `update_query`, `delete_query`, `select_count_query`,
  `select_average_query`, `select_inner_join_query`,
  `select_inner_join_query_paginate`, `select_left_join_query`,
  `select_json_data_query`, `select_json_data_query_with_approve`,
  `view_pending_request_by_provider` and `count_review_added_query`.
- `servicenest.database` – `parse_dsn` turns a DSN into
  `ConnectionSettings`; `get_mysql_db` opens one shared connection.
- `servicenest.errors` – the fixed domain messages (`ErrorMessage`) and the
  `DomainError` exception that carries them.
- `servicenest.handling` – the `Request` and `Response` types used by the
  controllers, and the helpers `success_response`, `error_response`,
  `get_pagination_params`, `get_filter_param`, `decode_body` (raising
  `ValueError` or `ValidationError`) and `apply_pagination`.
- `servicenest.admin_controller.AdminController`,
  `servicenest.provider_controller.ServiceProviderController` and
  `servicenest.householder_controller.HouseholderController`.

## Building queries

```python
from servicenest.queries import select_query, insert_query, delete_query

select_query("users", "email", "", ["id", "name"])
# 'SELECT id, name FROM users WHERE email = ?'

insert_query("services", ["id", "name"])
# 'INSERT INTO services (id, name) VALUES (?, ?)'

delete_query("services", "id", "provider_id")
# 'DELETE FROM services WHERE id = ? AND provider_id = ?'
```

Values are written as `?` placeholders and passed separately when the
statement is run. Integer limits and offsets given to the paginating
builders are written into the text when they are greater than zero; sort
orders other than `ASC` or `DESC` are ignored.

## Connecting to the database

`get_mysql_db()` reads `SQL_DSN` from the environment, connects with
PyMySQL (autocommit on), pings the server and returns the same connection on
every later call. A failure to connect or ping raises `ConnectionError`.

The DSN has the form `user:password@tcp(localhost:3306)/dbname?charset=utf8mb4`.
A `unix(/path/to/socket)` network is also understood. Missing parts fall
back to `127.0.0.1:3306` over TCP (or `/tmp/mysql.sock` for `unix`), and a
TCP address without a port gets `3306`:

```python
from servicenest.database import parse_dsn

settings = parse_dsn("user:password@tcp(localhost)/shop")
settings.host, settings.port, settings.database
# ('localhost', 3306, 'shop')
```

## Controllers

A controller is built around the service object it delegates to and turns a
`Request` into a `Response`:

```python
from servicenest.handling import Request
from servicenest.provider_controller import ServiceProviderController

controller = ServiceProviderController(provider_service)
request = Request(method="GET", path="/services", context={"userID": "provider123"})
response = controller.view_services(request)
print(response.status, response.json())
```

`Request` holds the body, the query string (`query`), route variables
(`path_params`) and values set by authentication (`context`, with `userID`
and `role`). Householder handlers accept the role `Householder`, acting for
the caller, or `Admin`, acting for the user named by the `user_id` query
parameter.

Every response body is a JSON envelope. Success looks like
`{"status": "Success", "message": ..., "data": ...}`, with `data` left out
when there is none. Failure looks like
`{"status": "Fail", "message": ..., "error_code": ...}`. The error codes in
use are 1001 (invalid body or input), 1003, 1006 and 1008 (failures in the
service layer), 1007 (invalid role), 2001 (missing `user_id`) and 2002
(missing request id). `Response.json()` serialises dataclasses, enums and
timestamps (UTC as `...Z`).

Listing handlers read `limit` (default 10) and `offset` (default 0) from the
query string. Scheduled times are sent as `YYYY-MM-DD HH:MM` and taken as
UTC; review ratings must lie between 1 and 5.

## What the package does not do

There is no HTTP server, router or command to start one: the controllers are
plain objects to be mounted in a web framework of your choice. The package
has no repositories or service layer either; each controller needs a service
object supplying the methods it calls, such as `view_services`,
`add_service` or `get_reviews`. Authentication is not performed; `userID` and
`role` must already be in the request context.