from realitytv_travel.crossref import CrossReference


def test_locations_for_show_keeps_collection_order(shows, locations):
    xref = CrossReference(shows, locations)

    related = xref.locations_for_show("the-bachelor")

    assert [loc.id for loc in related] == ["bachelor-mansion", "playa-escondida-resort"]


def test_shows_featuring_location_follows_show_order(shows, locations):
    xref = CrossReference(shows, locations)

    related = xref.shows_featuring_location("playa-escondida-resort")

    assert [show.id for show in related] == [
        "the-bachelor",
        "bachelor-in-paradise",
        "love-is-blind",
    ]


def test_related_sets_are_empty_without_reciprocal_links(shows, locations):
    xref = CrossReference(shows, locations)

    assert xref.locations_for_show("too-hot-to-handle") == []
    assert xref.shows_featuring_location("nassau-resort-club") == []
    assert xref.shows_featuring_location("no-such-location") == []


def test_every_reciprocal_link_resolves_to_a_non_empty_set(shows, locations):
    xref = CrossReference(shows, locations)
    for location in locations:
        for show_id in location.shows:
            if xref.resolve_show_name(show_id) != show_id:
                assert location in xref.locations_for_show(show_id)
                assert xref.shows_featuring_location(location.id)


def test_unknown_show_id_resolves_to_raw_id(shows, locations):
    xref = CrossReference(shows, locations)

    assert xref.resolve_show_name("ghost-show-id") == "ghost-show-id"
    assert xref.resolve_show_name("love-is-blind") == "Love Is Blind"


def test_show_names_for_uses_location_order(shows, locations):
    xref = CrossReference(shows, locations)
    ghost = next(loc for loc in locations if loc.id == "turks-caicos-villa")
    playa = next(loc for loc in locations if loc.id == "playa-escondida-resort")

    assert xref.show_names_for(ghost) == ["ghost-show-id"]
    assert xref.show_names_for(playa) == [
        "Bachelor in Paradise",
        "The Bachelor",
        "Love Is Blind",
    ]


def test_mean_show_rating_treats_missing_as_zero(shows, locations):
    xref = CrossReference(shows, locations)
    by_id = {loc.id: loc for loc in locations}

    assert xref.mean_show_rating(by_id["bachelor-mansion"]) == 4.2
    assert xref.mean_show_rating(by_id["nassau-resort-club"]) == 0.0
    assert xref.mean_show_rating(by_id["turks-caicos-villa"]) == 0.0
