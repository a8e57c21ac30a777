from backend.recipegen.models.image_url import approved_image_url, is_approved_host


def test_approved_image_url_allows_known_hosts():
    assert approved_image_url("https://images.unsplash.com/photo-1") == "https://images.unsplash.com/photo-1"
    assert approved_image_url("https://pixabay.com/photos/x.jpg") == "https://pixabay.com/photos/x.jpg"
    assert approved_image_url("https://images.pexels.com/photos/1/a.jpg.") == "https://images.pexels.com/photos/1/a.jpg"
    assert approved_image_url("https://images.unsplash.com/photo-1?w=400&q=80") == (
        "https://images.unsplash.com/photo-1?w=400&q=80"
    )


def test_approved_image_url_rejects_everything_else():
    assert approved_image_url("https://evil.example.com/img.png") is None
    assert approved_image_url("https://unsplash.com.evil.io/x.png") is None
    assert approved_image_url("ftp://images.pexels.com/a.jpg") is None
    assert approved_image_url("images.unsplash.com/x") is None
    assert approved_image_url("http://[broken") is None
    assert approved_image_url(None) is None


def test_backslash_cannot_smuggle_another_host():
    # browsers read the backslash as "/" and load from evil.example.com
    assert approved_image_url("https://evil.example.com\\@images.unsplash.com/x.png") is None
    assert approved_image_url("https://images.unsplash.com\\x.png") is None


def test_userinfo_and_non_url_characters_are_rejected():
    assert approved_image_url("https://images.unsplash.com@evil.example.com/x.png") is None
    assert approved_image_url("https://user:pw@images.unsplash.com/x.png") is None
    assert approved_image_url("https://images.unsplash.com/a b.png") is None
    assert approved_image_url('https://images.unsplash.com/"x".png') is None


def test_is_approved_host_matches_subdomains_only():
    assert is_approved_host("cdn.pixabay.com")
    assert is_approved_host("PEXELS.COM.")
    assert not is_approved_host("notpexels.com")
    assert not is_approved_host(None)
