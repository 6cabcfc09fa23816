# ordermenu

The storage and service layer for a small ordering system. It keeps a
menu of categories and dishes, links dishes to the categories they
belong to, and stores users, all in a single SQLite database below a
base directory.

## Layout of the base directory

Everything lives below a `data/` directory in the base directory you
pass in (the current directory when none is given):

- `data/config.toml` holds the server configuration. If it is missing,
  or cannot be parsed, or a field is missing or of the wrong type, it is
  rewritten with defaults: listen address `127.0.0.1:8008`, a freshly
  generated 32-character alphanumeric JWT secret with an expiry of 3600
  seconds, and logging to `order.log` at level `info` with daily
  rotation.
- `data/data.db` is the SQLite database. When the file does not exist
  it is created together with the tables `users`, `category`, `dish`
  and `category_dish_map`.
- `data/log/` receives the log file.

## Using it

```python
from pathlib import Path

from ordermenu.config import get_config, load_config
from ordermenu.db import get_db, init_db
from ordermenu.logsetup import init_logger
from ordermenu.menu import CreateCategoryData, CreateDishData, MenuService, query_menu

base_dir = Path.cwd()

config = load_config(base_dir)
init_logger(config.log, base_dir)
init_db(base_dir)

print(get_config().listen_addr)

service = MenuService(get_db())
drinks = service.create_category(CreateCategoryData(name="Drinks"))
service.create_dish(CreateDishData(name="Tea", price=3.5, picture="tea.png",
                                   category_ids=[drinks]))

for entry in query_menu(get_db()):
    print(entry.to_dict())
```

`load_config` and `init_db` are meant to be called once at start-up;
afterwards `get_config()` and `get_db()` return what they set up, and
raise `RuntimeError` if called before.

## Pieces

- `ordermenu.config`: `ServerConfig` (with `to_dict()` and
  `from_dict()`), `JwtConfig`, `load_config`, `get_config`,
  `check_config_file` and `generate_secret`.
- `ordermenu.logsetup`: `LogConfig` (`file_name`, `level`, `rolling` of
  `daily`, `hourly` or `never`) and `init_logger`, which logs to standard
  output at `info` and to the log file at the configured level, with
  timestamps at UTC+8, and sends uncaught exceptions to the log.
- `ordermenu.models`: the records `User`, `Category`, `Dish` (with its
  `DishStatus` of `NORMAL` or `DELIST`; `Dish.to_dict()` writes the
  status as `"Normal"` or `"Delist"`) and `CategoryDishMap`, plus
  `new_id()`, which returns a time-ordered 26-character ULID.
- `ordermenu.db`: `check_db_file`, `create_all_tables`, `init_db` and
  `get_db`.
- `ordermenu.repository`: `UserRepository`, `CategoryRepository`,
  `DishRepository` and `CategoryDishMapRepository`, each reading and
  writing one table on the connection given (or the one from
  `get_db()`). A new category gets the index after the highest one,
  starting at 0; a new dish gets the number of stored dishes plus one,
  status `NORMAL`, and the current local time as `created_at` unless
  one is passed. Categories and dishes are listed by index.
  `CategoryRepository.query_related_dishes` raises `NotFoundError` for
  an unknown category. Database failures are raised as `AppError`.
- `ordermenu.menu`: the request data `CreateCategoryData`,
  `CreateDishData` and `CreateUserData` (whose `validate()` requires
  usernames of at least 5 characters and passwords of at least 6, and
  raises `ValidationError` otherwise), the results `CategoryWithDishes`
  and `UserInfo`, `query_menu`, and `MenuService`, which creates and
  deletes categories and dishes together with their links and reads the
  menu, the categories and the dishes back.
- `ordermenu.errors`: `AppError` and its kinds `PublicError`,
  `InternalError`, `NotFoundError` and `ValidationError`. Each turns
  into a status code and a JSON-ready body with `to_response()`;
  `NotFoundError` gives 404, the others 500. Internal errors never
  reveal their message in the body.

## What it does not do

- There is no HTTP server and no command to start one. The listen
  address in the configuration is read and stored, but nothing here
  listens on it; `MenuService` and `to_response()` are what a web layer
  would call.
- There is no login and no token handling. The JWT secret and expiry
  are kept in the configuration but never used to issue or check
  tokens.
- Passwords are not hashed here. `UserRepository.insert_user` stores
  the password exactly as it is given, so callers must hash it first.