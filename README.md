# walletsvc

A small digital wallet service. It keeps clients and their accounts. It moves
money between accounts inside one database transaction and announces every
transfer as events. A second part of the package keeps a read-side projection
of account balances, fed by those events.

## Modules

- `walletsvc.domain` holds the `Client`, `Account` and `Transaction` entities.
  - A client needs a non-empty name and e-mail address.
  - An `Account` must have a client.
  - A `Transaction` is validated and applied as soon as it is created. Its
    amount must be greater than zero. The sending account must hold at least
    that amount.
  - Every refusal raises `DomainError`.
- `walletsvc.events` holds `EventDispatcher`.
  - It registers handlers, which are objects with a `handle(event)` method,
    under an event name.
  - `dispatch(event)` runs every handler registered for `event.name` in
    threads and waits for all of them. It re-raises the first error.
  - Registering the same handler object twice raises
    `HandlerAlreadyRegisteredError`.
  - Removing a handler that was never registered raises
    `HandlerNotRegisteredError`.
- `walletsvc.messages` holds `Event` and its subclasses `TransactionCreated`
  and `BalanceUpdated`. `Event.to_dict()` gives `{"Name": ..., "Payload": ...}`.
- `walletsvc.unit_of_work` holds `UnitOfWork`.
  - It hands out repositories registered by name. Each one is built from the
    connection.
  - `do(fn)` runs `fn` and then commits the connection. If `fn` raises, it
    rolls the connection back.
  - Starting a second `do` while one is open raises `UnitOfWorkError`.
- `walletsvc.wallet_usecases` holds `CreateClientUseCase`,
  `CreateAccountUseCase` and `CreateTransactionUseCase`.
  - They are written against the `ClientGateway`, `AccountGateway` and
    `TransactionGateway` protocols.
  - A transfer publishes `TransactionCreated` and then `BalanceUpdated`
    through the dispatcher.
- `walletsvc.wallet_db` holds the SQL gateways `ClientDB`, `AccountDB` and
  `TransactionDB`.
  - They work on any DB-API connection that uses `?` placeholders, such as
    `sqlite3`.
  - `create_schema(connection)` creates their tables.
  - A missing row raises `RecordNotFoundError`.
- `walletsvc.balance` holds the `Balance` entity, whose amount is never
  negative, and the `BalanceRepository` protocol.
- `walletsvc.balance_usecases` holds `GetBalanceByAccountUseCase` and
  `UpdateAccountsBalanceUseCase`.
  - `GetBalanceByAccountUseCase` raises `BalanceNotFoundError` for an account
    without a balance.
  - `UpdateAccountsBalanceUseCase` creates the balance if it is missing and
    updates it otherwise.
- `walletsvc.balance_db` holds `BalanceRepositoryDB` and
  `create_schema(connection)` for the `balances` table.
- `walletsvc.kafka` holds `Producer`, `Consumer` and `Message`.
  - `Producer.publish(msg, key, topic)` encodes `msg` as JSON and passes it to
    a client with a `produce(topic, value, key)` method.
  - `Consumer.consume()` subscribes a client and yields `Message` records
    until the client's `read_message()` returns `None`.
- `walletsvc.messaging_handlers` holds three handlers.
  - `TransactionCreatedKafkaHandler` publishes to the `transactions` topic.
  - `BalanceUpdatedKafkaHandler` publishes to the `balances` topic.
  - `BalanceUpdatedConsumerHandler` decodes a published `BalanceUpdated`
    record and applies it with `UpdateAccountsBalanceUseCase`.
- `walletsvc.web` holds the Flask-based `WebServer` and `Route`, and the views
  `WebClientHandler`, `WebAccountHandler`, `WebTransactionHandler` and
  `HttpBalanceHandler`.

## HTTP endpoints of the wallet server

- `POST /clients` with `{"name": ..., "email": ...}` creates a client.
- `POST /accounts` with `{"client_id": ...}` opens an account.
- `POST /transactions` with
  `{"account_id_from": ..., "account_id_to": ..., "amount": ...}` moves money.

On success, each endpoint answers `201` with JSON. A body that is not a JSON
object, or has fields of the wrong type, answers `400`. If creating a client
or an account fails, the answer is `500`. A refused transfer answers `400`,
with the reason as the body.

## Running the wallet server

```
pip install .
walletsvc --database wallet.db --address :8080 --events -
```

The command takes three options, all optional:

- `--database`: an SQLite file. The default is `wallet.db`. Its tables are
  created when missing.
- `--address`: `[host]:port`. The default is `:8080`.
- `--events`: where published events go. Each event is written as one JSON
  line, `{"topic": ..., "key": ..., "value": ...}`. Give a file name to append
  to that file. `-` means standard output, which is the default.

`walletsvc.app.create_wallet_server(connection, producer, address)` builds
the same server. Its `build_app()` returns the Flask application, for
embedding or testing.

## Serving balances

No command starts the balance side. Wire it up like this:

```python
import sqlite3
from walletsvc.balance_db import BalanceRepositoryDB, create_schema
from walletsvc.balance_usecases import GetBalanceByAccountUseCase
from walletsvc.web import HttpBalanceHandler, Route, WebServer

connection = sqlite3.connect("balances.db", check_same_thread=False)
create_schema(connection)
handler = HttpBalanceHandler(GetBalanceByAccountUseCase(BalanceRepositoryDB(connection)))
server = WebServer(":3003", threaded=False)
server.add_handler(Route("/balances/<account_id>", handler.get_balance_by_account, method="GET"))
server.start()
```

The view answers `200` with `{"id": ..., "amount": ...}`. Any failure,
including a missing balance, answers `500`.

## What it does not do

- The package has no client for a real message broker. Published events go
  to whatever producer client you pass to `Producer`. The command writes them
  as JSON lines.
- `Consumer` needs a consumer client that you supply.
- Nothing feeds consumed records into `BalanceUpdatedConsumerHandler` for you.
- Storage is SQLite through `sqlite3`. No other database driver is included.

## Tests

```
pip install ".[test]"
pytest
```