import pytest
from decimal import Decimal
from httpx import AsyncClient
from uuid import uuid4


@pytest.mark.asyncio
async def test_create_cash_flow_success(client: AsyncClient, sample_category):
    payload = {
        "belongs_date": "2024-05-01",
        "flow_type": "outcome",
        "amount": "19.90",
        "description": "Feira",
        "category_name": "Food",
    }
    response = await client.post("/cash_flows/", json=payload)
    assert response.status_code == 201
    data = response.json()
    assert Decimal(data["amount"]) == Decimal("19.90")
    assert data["flow_type"] == {"value": "outcome", "display_name": "Despesa"}
    assert data["category"]["name"] == "Food"
    assert data["category_id"] == str(sample_category.id)


@pytest.mark.asyncio
async def test_create_cash_flow_unknown_category(client: AsyncClient):
    payload = {"belongs_date": "2024-05-01", "amount": "1.00", "category_name": "Nope"}
    response = await client.post("/cash_flows/", json=payload)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_cash_flow_invalid_amount(client: AsyncClient, sample_category):
    payload = {"belongs_date": "2024-05-01", "amount": "0", "category_name": "Food"}
    response = await client.post("/cash_flows/", json=payload)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_cash_flow(client: AsyncClient, sample_cash_flows):
    salary = sample_cash_flows["salary"]
    response = await client.get(f"/cash_flows/{salary.id}")
    assert response.status_code == 200
    data = response.json()
    assert data["flow_type"]["display_name"] == "Receita"
    assert data["category"]["name"] == "Salary"


@pytest.mark.asyncio
async def test_get_cash_flow_not_found(client: AsyncClient):
    response = await client.get(f"/cash_flows/{uuid4()}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_cash_flows(client: AsyncClient, sample_cash_flows):
    response = await client.get("/cash_flows/", params={"page": 1, "limit": 2})
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 4
    assert data["pages"] == 2
    assert len(data["items"]) == 2


@pytest.mark.asyncio
async def test_list_cash_flows_by_flow_type(client: AsyncClient, sample_cash_flows):
    response = await client.get("/cash_flows/", params={"flow_type": "income"})
    assert response.status_code == 200
    assert response.json()["total"] == 1


@pytest.mark.asyncio
async def test_query_by_fuzzy_description(client: AsyncClient, sample_cash_flows):
    response = await client.get(
        "/cash_flows/query", params={"fuzzy_description": "padaria"}
    )
    assert response.status_code == 200
    assert len(response.json()) == 2


@pytest.mark.asyncio
async def test_query_by_date(client: AsyncClient, sample_cash_flows):
    response = await client.get("/cash_flows/query", params={"date": "2024-03-05"})
    assert response.status_code == 200
    assert [cf["description"] for cf in response.json()] == ["Mercado do bairro"]


@pytest.mark.asyncio
async def test_query_with_conflicting_params(client: AsyncClient, sample_cash_flows):
    response = await client.get(
        "/cash_flows/query",
        params={"date": "2024-03-05", "exact_description": "Padaria"},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_range(client: AsyncClient, sample_cash_flows):
    response = await client.get(
        "/cash_flows/range", params={"from": "2024-03-01", "to": "2024-03-31"}
    )
    assert response.status_code == 200
    assert [cf["belongs_date"] for cf in response.json()] == [
        "2024-03-05",
        "2024-03-10",
        "2024-03-20",
    ]


@pytest.mark.asyncio
async def test_range_missing_date(client: AsyncClient, sample_cash_flows):
    response = await client.get("/cash_flows/range", params={"from": "2024-03-01"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_range_from_after_to(client: AsyncClient, sample_cash_flows):
    response = await client.get(
        "/cash_flows/range", params={"from": "2024-04-01", "to": "2024-03-01"}
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_range_invalid_date_format(client: AsyncClient):
    response = await client.get(
        "/cash_flows/range", params={"from": "01/03/2024", "to": "2024-03-31"}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_summary(client: AsyncClient, sample_cash_flows):
    response = await client.get(
        "/cash_flows/summary", params={"period": "monthly", "date": "2024-03-15"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 3
    assert Decimal(data["balance"]) == Decimal("4919.75")
    assert Decimal(data["category_breakdown"]["Food"]) == Decimal("-80.25")


@pytest.mark.asyncio
async def test_summary_invalid_period(client: AsyncClient):
    response = await client.get(
        "/cash_flows/summary", params={"period": "weekly", "date": "2024-03-15"}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_cash_flow(client: AsyncClient, sample_cash_flows):
    market = sample_cash_flows["market"]
    response = await client.put(
        f"/cash_flows/{market.id}",
        json={"category_name": "Salary", "flow_type": "income"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["category"]["name"] == "Salary"
    assert data["flow_type"]["display_name"] == "Receita"


@pytest.mark.asyncio
async def test_delete_cash_flow(client: AsyncClient, sample_cash_flows):
    market = sample_cash_flows["market"]
    response = await client.delete(f"/cash_flows/{market.id}")
    assert response.status_code == 204

    response = await client.get(f"/cash_flows/{market.id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_cash_flows_by_date(client: AsyncClient, sample_cash_flows):
    response = await client.delete("/cash_flows/", params={"date": "2024-03-20"})
    assert response.status_code == 200
    assert response.json() == {"deleted": 1}


@pytest.mark.asyncio
async def test_delete_cash_flows_without_params(client: AsyncClient):
    response = await client.delete("/cash_flows/")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_category_with_cash_flows_cannot_be_deleted(
    client: AsyncClient, sample_cash_flows
):
    response = await client.delete("/categories/", params={"name": "Food"})
    assert response.status_code == 409
