from clinic_backend.services.location_service import LocationService

central_hospital = {
    "name": "Central Hospital",
    "address": "123 Medical Center Dr, Healthcare City",
    "phone": "+1234567890",
    "email": "info@centralhospital.com",
    "locationId": 1,
    "adminId": "1",
    "facilities": ["Emergency", "ICU", "Surgery", "ICU"],
    "operatingHours": {"monday": "08:00-20:00", "sunday": "10:00-16:00"},
}


class TestLocations:

    def test_locations_are_public(self, client):
        response = client.post("/locations", json={
            "state": "Kerala", "district": "Kottayam", "area": "Pala"
        })
        assert response.status_code == 200
        data = response.json()
        assert data["id"]
        assert data["state"] == "Kerala"

        assert client.get("/locations").status_code == 200
        assert client.get(f"/locations/{data['id']}").json()["area"] == "Pala"

    def test_list_ordered_by_state_district_area(self, client):
        for state, district, area in [
            ("Tamil Nadu", "Chennai", "Velachery"),
            ("Kerala", "Kottayam", "Vaikom"),
            ("Tamil Nadu", "Chennai", "Anna Nagar"),
            ("Delhi", "Central Delhi", "Connaught Place"),
        ]:
            client.post("/locations", json={"state": state, "district": district, "area": area})

        locations = client.get("/locations").json()
        assert [(l["state"], l["area"]) for l in locations] == [
            ("Delhi", "Connaught Place"),
            ("Kerala", "Vaikom"),
            ("Tamil Nadu", "Anna Nagar"),
            ("Tamil Nadu", "Velachery"),
        ]

    def test_duplicate_triple_is_conflict(self, client):
        location = {"state": "Kerala", "district": "Kottayam", "area": "Vaikom"}
        assert client.post("/locations", json=location).status_code == 200

        response = client.post("/locations", json=location)
        assert response.status_code == 409
        assert response.json()["error"] == "Location already exists"

    def test_same_area_in_other_district_is_allowed(self, client):
        client.post("/locations", json={"state": "Kerala", "district": "Kottayam", "area": "Town"})
        response = client.post("/locations", json={"state": "Kerala", "district": "Idukki", "area": "Town"})
        assert response.status_code == 200

    def test_state_is_required(self, client):
        assert client.post("/locations", json={"district": "Chennai"}).status_code == 400

    def test_missing_location(self, client):
        assert client.get("/locations/999").status_code == 404

    def test_missing_district_and_area_are_one_triple(self, client):
        assert client.post("/locations", json={"state": "Goa"}).status_code == 200

        response = client.post("/locations", json={"state": "Goa", "district": None})
        assert response.status_code == 409

    def test_unique_index_rejects_duplicate_that_passes_lookup(self, client, monkeypatch):
        monkeypatch.setattr(LocationService, "_ensure_triple_available", lambda self, data: None)

        assert client.post("/locations", json={"state": "Goa"}).status_code == 200
        response = client.post("/locations", json={"state": "Goa"})
        assert response.status_code == 409
        assert response.json()["code"] == "duplicate_key"
        assert len(client.get("/locations").json()) == 1


class TestClinics:

    def test_create_clinic_parses_json_fields(self, client):
        response = client.post("/clinics", json=central_hospital)
        assert response.status_code == 200

        data = response.json()
        assert data["facilities"] == ["Emergency", "ICU", "Surgery"]
        assert data["operatingHours"] == central_hospital["operatingHours"]
        assert data["status"] == "active"
        assert data["locationId"] == 1
        assert data["createdAt"]

    def test_list_ordered_by_name(self, client):
        client.post("/clinics", json=dict(central_hospital, name="Zeta Clinic"))
        client.post("/clinics", json=dict(central_hospital, name="Alpha Clinic"))

        clinics = client.get("/clinics").json()
        assert [clinic["name"] for clinic in clinics] == ["Alpha Clinic", "Zeta Clinic"]
        assert clinics[0]["facilities"] == ["Emergency", "ICU", "Surgery"]

    def test_defaults_for_json_fields(self, client):
        response = client.post("/clinics", json={"name": "Bare Clinic", "address": "1 Main St"})
        assert response.status_code == 200
        assert response.json()["facilities"] == []
        assert response.json()["operatingHours"] == {}

    def test_get_clinic(self, client):
        clinic_id = client.post("/clinics", json=central_hospital).json()["id"]
        response = client.get(f"/clinics/{clinic_id}")
        assert response.status_code == 200
        assert response.json()["name"] == "Central Hospital"

    def test_name_and_address_required(self, client):
        assert client.post("/clinics", json={"name": "No Address"}).status_code == 400

    def test_missing_clinic(self, client):
        assert client.get("/clinics/999").status_code == 404
