import logging

from urlnorm import UrlNormalizer, build_configuration, cluster_urls


def test_cluster_urls_groups_equivalent_urls():
    urls = [
        "http://www.google.com",
        "https://example.com/foo",
        "https://google.com/",
        "http://example.com//foo/?utm_source=news",
        "http://example.com/bar",
    ]
    clusters = cluster_urls(urls)
    assert [c.key for c in clusters] == ["google.com:", "example.com:foo:", "example.com:bar:"]
    assert clusters[0].urls == ["http://www.google.com", "https://google.com/"]
    assert clusters[1].size == 2
    assert clusters[1].representative == "https://example.com/foo"
    assert clusters[2].size == 1


def test_cluster_urls_keeps_duplicates():
    clusters = cluster_urls(["http://x.com", "http://x.com"])
    assert len(clusters) == 1
    assert clusters[0].urls == ["http://x.com", "http://x.com"]


def test_cluster_urls_uses_supplied_normalizer():
    normalizer = UrlNormalizer(build_configuration({"host_prefixes": set(), "host_prefix_patterns": []}))
    clusters = cluster_urls(["http://www.x.com", "http://x.com"], normalizer)
    assert len(clusters) == 2


def test_cluster_urls_logs_summary(caplog):
    with caplog.at_level(logging.INFO, logger="urlnorm.clustering"):
        cluster_urls(["http://a.com", "http://b.com"])
    assert "Clustered 2 URLs into 2 groups" in caplog.text


def test_cluster_urls_empty_input():
    assert cluster_urls([]) == []
