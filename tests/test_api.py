from bartender import crud, schemas


MARGARITA = {
    "name": "Margarita",
    "instructions": "Shake with ice and strain into a salt-rimmed glass.",
    "ingredients": [
        {"name": "Tequila", "quantity": "2", "unit": "oz"},
        {"name": "Lime Juice", "quantity": "1", "unit": "oz"},
        {"name": "Triple Sec", "quantity": "1", "unit": "oz"},
    ],
}


def test_root(client):
    res = client.get("/")
    assert res.status_code == 200
    assert "running" in res.text


def test_ingredient_crud(client):
    res = client.post("/api/ingredients", json={"name": "  Tequila "})
    assert res.status_code == 201
    obj = res.json()
    assert obj["name"] == "Tequila"
    iid = obj["id"]

    client.post("/api/ingredients", json={"name": "Bourbon"})
    res = client.get("/api/ingredients")
    assert res.status_code == 200
    assert [i["name"] for i in res.json()] == ["Bourbon", "Tequila"]

    res = client.delete(f"/api/ingredients/{iid}")
    assert res.status_code == 200
    assert res.json() == {"id": iid, "name": "Tequila"}

    res = client.delete(f"/api/ingredients/{iid}")
    assert res.status_code == 404
    assert "error" in res.json()


def test_add_ingredient_duplicate_returns_409(client):
    assert client.post("/api/ingredients", json={"name": "Lime Juice"}).status_code == 201
    res = client.post("/api/ingredients", json={"name": " lime JUICE"})
    assert res.status_code == 409
    assert res.json()["error"] == "Ingredient already exists."


def test_add_ingredient_validation(client):
    assert client.post("/api/ingredients", json={"name": "   "}).status_code == 400
    assert client.post("/api/ingredients", json={}).status_code == 400
    assert client.post("/api/ingredients", json={"name": 12}).status_code == 400


def test_delete_ingredient_bad_id(client):
    res = client.delete("/api/ingredients/abc")
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid ingredient ID format."


def test_out_of_range_id_is_400(client):
    huge = "99999999999999999999"
    res = client.delete(f"/api/ingredients/{huge}")
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid ingredient ID format."
    assert client.delete(f"/api/recipes/{huge}").status_code == 400
    assert client.get(f"/api/recipes/{huge}").status_code == 400
    # the largest BIGINT is still a well-formed id, just not a stored one
    assert client.delete(f"/api/recipes/{schemas.MAX_ID}").status_code == 404


def test_create_and_list_recipes(client, db):
    crud.create_recipe(
        db,
        schemas.RecipeCreate(
            name="Old Fashioned",
            instructions="Stir with ice.",
            ingredients=[{"name": "Bourbon", "quantity": "2", "unit": "oz"}],
        ),
        is_custom=False,
    )

    res = client.post("/api/recipes", json=MARGARITA)
    assert res.status_code == 201
    created = res.json()
    assert created["id"]
    assert created["isCustom"] is True
    assert created["ingredients"] == MARGARITA["ingredients"]

    res = client.get("/api/recipes")
    assert res.status_code == 200
    assert [(r["name"], r["isCustom"]) for r in res.json()] == [
        ("Margarita", True),
        ("Old Fashioned", False),
    ]

    res = client.get("/api/recipes?custom_only=true")
    assert [r["name"] for r in res.json()] == ["Margarita"]

    res = client.get(f"/api/recipes/{created['id']}")
    assert res.status_code == 200
    assert res.json()["name"] == "Margarita"


def test_create_recipe_missing_quantity_is_400_and_writes_nothing(client, db):
    before = crud.count_rows(db)
    bad = {
        **MARGARITA,
        "ingredients": [
            {"name": "Tequila", "quantity": "2", "unit": "oz"},
            {"name": "Lime Juice", "unit": "oz"},
        ],
    }
    res = client.post("/api/recipes", json=bad)
    assert res.status_code == 400
    assert crud.count_rows(db) == before


def test_create_recipe_requires_fields(client):
    assert client.post("/api/recipes", json={**MARGARITA, "name": " "}).status_code == 400
    assert client.post("/api/recipes", json={**MARGARITA, "instructions": ""}).status_code == 400
    assert client.post("/api/recipes", json={**MARGARITA, "ingredients": []}).status_code == 400
    res = client.post("/api/recipes", json={**MARGARITA, "ingredients": [{"name": "", "quantity": "1"}]})
    assert res.status_code == 400
    assert res.json()["error"] == "Each ingredient must have a name."


def test_delete_recipe(client, db):
    standard = crud.create_recipe(db, schemas.RecipeCreate(**MARGARITA), is_custom=False)
    standard_id = standard.id
    custom_id = client.post("/api/recipes", json={**MARGARITA, "name": "House Margarita"}).json()["id"]

    res = client.delete(f"/api/recipes/{standard_id}")
    assert res.status_code == 403
    assert res.json()["error"] == "Cannot delete standard recipes."

    res = client.delete(f"/api/recipes/{custom_id}")
    assert res.status_code == 200
    assert res.json()["name"] == "House Margarita"

    assert client.delete(f"/api/recipes/{custom_id}").status_code == 404
    assert client.get(f"/api/recipes/{custom_id}").status_code == 404
    assert client.delete("/api/recipes/1x").status_code == 400
    assert crud.count_rows(db)["recipe_ingredients"] == 3


def test_suggestions(client):
    client.post("/api/recipes", json=MARGARITA)
    client.post("/api/ingredients", json={"name": "lime juice"})
    res = client.get("/api/ingredients/suggestions")
    assert res.status_code == 200
    assert res.json() == ["Tequila", "Triple Sec"]


def test_match_api(client):
    client.post("/api/recipes", json=MARGARITA)
    client.post("/api/recipes", json={
        "name": "Old Fashioned",
        "instructions": "Stir.",
        "ingredients": [{"name": "Bourbon", "quantity": "2", "unit": "oz"}],
    })

    res = client.post("/api/match", json={"ingredients": ["tequila", "Lime Juice", "TRIPLE SEC"]})
    assert res.status_code == 200
    data = res.json()
    assert "have" in data and "results" in data
    found = {r["name"]: r for r in data["results"]}
    assert found["Margarita"]["match"] is True
    assert found["Old Fashioned"]["missing"] == ["Bourbon"]

    res = client.post("/api/match", json={"ingredients": ["Bourbon"], "only_makeable": True})
    assert [r["name"] for r in res.json()["results"]] == ["Old Fashioned"]


def test_match_api_uses_stored_inventory(client):
    client.post("/api/recipes", json=MARGARITA)
    for name in ["Tequila", "Lime Juice"]:
        client.post("/api/ingredients", json={"name": name})

    res = client.post("/api/match", json={"search": "marg"})
    result = res.json()["results"][0]
    assert result["match"] is False
    assert result["missing"] == ["Triple Sec"]

    client.post("/api/ingredients", json={"name": "Triple Sec"})
    res = client.post("/api/match", json={"only_makeable": True})
    assert [r["name"] for r in res.json()["results"]] == ["Margarita"]
