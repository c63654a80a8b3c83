def is_favorite_team_playing(match, favorite_teams):
    team1 = (match.team1 or "").lower()
    team2 = (match.team2 or "").lower()
    for team in favorite_teams:
        needle = str(team).lower()
        if needle in team1 or needle in team2:
            return True
    return False


def filter_matches(matches, favorite_teams):
    """Keeps matches where either side contains a favorite team name (case-insensitive).

    No favorites means no filtering: the input list is returned as-is.
    """
    if not favorite_teams:
        return matches
    return [m for m in matches if is_favorite_team_playing(m, favorite_teams)]
