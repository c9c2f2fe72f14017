from olimpiadas.core.navigation import initial_route, navigation_items, resolve_navigation


def labels(codes):
    return [item.label for item in navigation_items(codes)]


def test_athlete_menu():
    assert labels(["ATL"]) == [
        "Perfil",
        "Cronograma",
        "Minhas Inscrições",
        "Minhas Pontuações",
    ]


def test_general_public_has_no_menu_but_lands_on_profile():
    assert labels(["PGR"]) == []
    assert initial_route(["PGR"]) == "/athlete-profile"


def test_judge_only_sees_judge_entry():
    assert labels(["JUZ"]) == ["Juiz"]
    assert initial_route(["JUZ"]) == "/judge-dashboard"


def test_union_of_roles_keeps_table_order():
    assert labels(["ADM", "ORE"]) == [
        "Perfil",
        "Cronograma",
        "Minhas Inscrições",
        "Organizador(a)",
        "Administração",
    ]


def test_redirect_priority():
    assert initial_route(["ADM", "ATL"]) == "/athlete-profile"
    assert initial_route(["ADM", "RDD"]) == "/delegation-dashboard"
    assert initial_route(["ADM", "ORE"]) == "/organizer-dashboard"
    assert initial_route(["ADM", "JUZ"]) == "/administration"


def test_no_roles():
    result = resolve_navigation([])
    assert result.items == []
    assert result.redirect is None


def test_child_profiles_have_no_landing_page():
    assert resolve_navigation(["DEP", "C-6"]).redirect is None
