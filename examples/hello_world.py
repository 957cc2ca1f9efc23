"""
casbin_couchbase_adapter — Hello World

Rules live in a document store, one document per rule.  The enforcer
loads them on start and writes every change straight back.

Runs against the in-memory store so no Couchbase server is needed.  Drop
the ``store=`` argument to talk to a real cluster.
"""

import asyncio

import casbin
from casbin.model import Model

from casbin_couchbase_adapter import CouchbaseAdapter
from casbin_couchbase_adapter.stores import InMemoryStore

MODEL = """
[request_definition]
r = sub, obj, act

[policy_definition]
p = sub, obj, act

[role_definition]
g = _, _

[policy_effect]
e = some(where (p.eft == allow))

[matchers]
m = g(r.sub, p.sub) && r.obj == p.obj && r.act == p.act
"""


async def main() -> None:
    adapter = await CouchbaseAdapter.new_adapter(
        "couchbase://localhost",
        store=InMemoryStore(),
        bucket_name="policies",
        cluster_username="Administrator",
        cluster_password="password",
        key_delimiter="::",
        key_prefix="Permission",
    )

    model = Model()
    model.load_model_from_text(MODEL)
    enforcer = casbin.AsyncEnforcer(model, adapter)
    await enforcer.load_policy()

    # ─── Writes go through the adapter ───
    await enforcer.add_policy("admin", "reports", "read")
    await enforcer.add_grouping_policy("alice", "admin")

    for user in ("alice", "bob"):
        verdict = "allowed" if enforcer.enforce(user, "reports", "read") else "denied"
        print(f"  {user:<6} read reports -> {verdict}")

    # ─── Remove every rule on the 'reports' object ───
    await enforcer.remove_filtered_policy(1, "reports")
    await enforcer.load_policy()
    print(f"  after cleanup alice -> {enforcer.enforce('alice', 'reports', 'read')}")

    await adapter.close()


if __name__ == "__main__":
    asyncio.run(main())
