API = "/api/v1"

PHISHING_SMS = (
    "Urgent: verify your account at "
    "http://secure-login-google.com/verify?session=abc or bit.ly/4PhishLink"
)


def test_root_and_health(client):
    assert client.get("/").json()["message"] == "PhishCheck API"

    response = client.get(f"{API}/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_analyze_text(client):
    response = client.post(f"{API}/analyze", json={"text": PHISHING_SMS})
    assert response.status_code == 200

    data = response.json()
    assert data["score"] == 80
    assert data["risk"]["tier"] == "high"
    assert data["url_count"] == 2
    assert data["weights"] == {"text": 5, "urlSevere": 15, "urlMedium": 10, "urlMild": 6}
    assert data["text_findings"] == [
        'Urgency/persuasion keyword found: "urgent"',
        'Urgency/persuasion keyword found: "verify your account"',
    ]
    first = data["urls"][0]
    assert first["base_domain"] == "secure-login-google.com"
    assert "Text mentions brand 'google' but domain is secure-login-google.com" in first["flags"]
    assert first["signals"][0] == {
        "kind": "sensitive_path",
        "severity": "medium",
        "detail": {},
        "message": "Sensitive path/parameter (login/verify/...)",
    }


def test_analyze_empty_text(client):
    data = client.post(f"{API}/analyze", json={}).json()
    assert data["score"] == 0
    assert data["urls"] == []
    assert data["risk"]["tier"] == "low"


def test_category_filter(client):
    client.post(f"{API}/lists/deny", json={"domain": "bit.ly"})

    response = client.post(f"{API}/analyze?category=malicious", json={"text": PHISHING_SMS})
    data = response.json()
    assert [u["raw"] for u in data["urls"]] == ["bit.ly/4PhishLink"]
    # Filtering only narrows the list, not the summary
    assert data["url_count"] == 2

    assert client.post(f"{API}/analyze?category=bogus", json={"text": ""}).status_code == 422


def test_analyze_file_upload(client):
    html = b'<html><body><a href="http://paypa1.com/login">PayPal</a></body></html>'
    response = client.post(
        f"{API}/analyze/file",
        files={"file": ("mail.html", html, "text/html")},
        data={"text": "Urgent"}
    )
    assert response.status_code == 200

    data = response.json()
    assert [u["raw"] for u in data["urls"]] == ["http://paypa1.com/login"]
    assert data["text_findings"] == ['Urgency/persuasion keyword found: "urgent"']

    pasted = client.post(f"{API}/analyze", json={"text": "Urgent\n\n" + html.decode()}).json()
    assert data["score"] == pasted["score"]
    assert data["urls"] == pasted["urls"]


def test_analyze_file_rejects_unknown_type(client):
    response = client.post(
        f"{API}/analyze/file",
        files={"file": ("tool.exe", b"MZ", "application/octet-stream")}
    )
    assert response.status_code == 415


def test_extract(client):
    response = client.post(f"{API}/extract", json={"text": "a.com b.org/x a.com"})
    assert response.json() == {"urls": ["a.com", "b.org/x"]}


def test_csv_report(client):
    response = client.post(f"{API}/report/csv", json={"text": "bit.ly/abc"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="phishing-report-' in response.headers["content-disposition"]
    assert response.text.splitlines() == [
        "url,host,base_domain,tld,flags,score",
        "http://bit.ly/abc,bit.ly,bit.ly,ly,Link shortener hides real destination,15",
    ]


def test_json_report(client):
    client.post(f"{API}/lists/allow", json={"domain": "example.org"})

    response = client.post(f"{API}/report/json", json={"text": PHISHING_SMS})
    assert response.status_code == 200
    assert response.headers["content-disposition"].endswith('.json"')

    data = response.json()
    assert data["summary"]["score"] == 80
    assert data["summary"]["risk"] == "High risk"
    assert data["whitelist"] == ["example.org"]
    assert data["blacklist"] == []
    assert data["snippet"] == PHISHING_SMS


def test_weights_roundtrip_and_reset(client):
    assert client.get(f"{API}/weights").json() == {"text": 5, "urlSevere": 15, "urlMedium": 10, "urlMild": 6}

    new = {"text": 10, "urlSevere": 25, "urlMedium": 10, "urlMild": 1}
    assert client.put(f"{API}/weights", json=new).json() == new
    assert client.get(f"{API}/weights").json() == new

    data = client.post(f"{API}/analyze", json={"text": "urgent"}).json()
    assert data["score"] == 10

    reset = client.post(f"{API}/weights/reset").json()
    assert reset == {"text": 5, "urlSevere": 15, "urlMedium": 10, "urlMild": 6}


def test_weights_out_of_range_are_rejected(client):
    for bad in ({"text": 0}, {"urlSevere": 26}, {"urlMild": "heavy"}):
        assert client.put(f"{API}/weights", json=bad).status_code == 422
    assert client.get(f"{API}/weights").json()["text"] == 5


def test_list_mutations(client):
    response = client.post(f"{API}/lists/deny", json={"domain": "Evil.com"})
    assert response.status_code == 200
    assert response.json() == {
        "applied": True, "domain": "evil.com", "list_name": "deny", "reason": None, "conflict": False
    }

    data = client.post(f"{API}/analyze", json={"text": "http://evil.com/x"}).json()
    assert data["urls"][0]["category"] == "malicious"

    conflict = client.post(f"{API}/lists/allow", json={"domain": "evil.com"})
    assert conflict.status_code == 200
    assert conflict.json() == {
        "applied": False,
        "domain": "evil.com",
        "list_name": "allow",
        "reason": "already on deny list",
        "conflict": True,
    }
    assert client.get(f"{API}/lists").json() == {"allow": [], "deny": ["evil.com"]}

    duplicate = client.post(f"{API}/lists/deny", json={"domain": "evil.com"}).json()
    assert duplicate["applied"] is False
    assert duplicate["reason"] == "already present"

    assert client.delete(f"{API}/lists/deny/evil.com").status_code == 200
    assert client.delete(f"{API}/lists/deny/evil.com").status_code == 404
    assert client.get(f"{API}/lists").json() == {"allow": [], "deny": []}


def test_unknown_list_name(client):
    assert client.post(f"{API}/lists/grey", json={"domain": "x.com"}).status_code == 422
    assert client.post(f"{API}/lists/deny", json={"domain": ""}).status_code == 422


def test_add_domains_from_analysis(client):
    client.post(f"{API}/lists/deny", json={"domain": "bit.ly"})

    response = client.post(f"{API}/lists/allow/from-analysis", json={"text": PHISHING_SMS})
    assert response.status_code == 200

    data = response.json()
    assert data["list_name"] == "allow"
    assert data["applied"] == ["secure-login-google.com"]
    assert [r["domain"] for r in data["rejected"]] == ["bit.ly"]
    assert data["rejected"][0]["reason"] == "already on deny list"

    assert client.get(f"{API}/lists").json() == {
        "allow": ["secure-login-google.com"],
        "deny": ["bit.ly"],
    }
