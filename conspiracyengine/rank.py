from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SocietyRank:
    """Secret-society title earned by proving conspiracies."""

    id: str
    society: str
    title: str
    conspiracies_required: int
    flavor_text: str = ""

    def describe(self) -> str:
        if self.society == "None":
            return self.title
        return f"{self.title} of the {self.society}"


RANKS: tuple[SocietyRank, ...] = (
    SocietyRank("uninitiated", "None", "Uninitiated", 0, "You know nothing... yet."),
    SocietyRank("truth_curious", "Truth Seekers", "Curious Mind", 1,
                "You've begun to question the narrative."),
    SocietyRank("truth_skeptic", "Truth Seekers", "Skeptic", 2,
                "Trust nothing. Verify everything."),
    SocietyRank("truth_researcher", "Truth Seekers", "Researcher", 3,
                "Down the rabbit hole you go."),
    SocietyRank("mason_entered", "Freemasons", "Entered Apprentice", 4,
                "The square and compass guide your path."),
    SocietyRank("mason_fellow", "Freemasons", "Fellow Craft", 5,
                "You've learned the secret handshake."),
    SocietyRank("mason_master", "Freemasons", "Master Mason", 6,
                "The third degree is complete."),
    SocietyRank("rosy_neophyte", "Rosicrucians", "Neophyte", 7,
                "The rose blooms upon the cross."),
    SocietyRank("rosy_zelator", "Rosicrucians", "Zelator", 8,
                "Alchemical knowledge flows through you."),
    SocietyRank("rosy_adept", "Rosicrucians", "Adeptus Minor", 9,
                "The invisible college welcomes you."),
    SocietyRank("illuminati_novice", "Illuminati", "Novice", 10, "Welcome to the pyramid."),
    SocietyRank("illuminati_minerval", "Illuminati", "Minerval", 11,
                "The owl of Minerva flies at dusk."),
    SocietyRank("illuminati_illuminatus", "Illuminati", "Illuminatus Minor", 12,
                "You see beyond the veil."),
    SocietyRank("templar_squire", "Knights Templar", "Squire", 13,
                "The crusade for truth begins."),
    SocietyRank("templar_knight", "Knights Templar", "Knight", 14,
                "Your sword is truth. Your shield is evidence."),
    SocietyRank("templar_commander", "Knights Templar", "Commander", 15,
                "The Holy Grail of secrets awaits."),
    SocietyRank("bones_pledge", "Skull and Bones", "Pledge", 16, "The Tomb opens its doors."),
    SocietyRank("bones_bonesman", "Skull and Bones", "Bonesman", 17,
                "322. The number echoes in the crypt."),
    SocietyRank("bones_patriarch", "Skull and Bones", "Patriarch", 18,
                "Presidents bow to your lineage."),
    SocietyRank("thule_initiate", "Thule Society", "Initiate", 19, "Hyperborea calls to you."),
    SocietyRank("thule_mystic", "Thule Society", "Mystic", 20,
                "The Vril energy flows through you."),
    SocietyRank("thule_archon", "Thule Society", "Archon", 21,
                "Ancient knowledge is your domain."),
    SocietyRank("council_observer", "The Council of 13", "Observer", 22,
                "You witness the world's true rulers."),
    SocietyRank("council_member", "The Council of 13", "Council Member", 23,
                "Your vote shapes reality itself."),
    SocietyRank("council_inner", "The Council of 13", "Inner Circle", 24,
                "The architects of existence bow to you."),
    SocietyRank("eternal_one", "The Eternal Conspiracy", "The One Who Knows", 25,
                "You ARE the conspiracy. Always have been. Always will be."),
)


def rank_for(proven: int) -> SocietyRank:
    """Highest rank whose requirement *proven* conspiracies meets."""
    current = RANKS[0]
    for rank in RANKS:
        if proven < rank.conspiracies_required:
            break
        current = rank
    return current


def next_rank(proven: int) -> SocietyRank | None:
    """The next rank to earn, or None at the top."""
    for rank in RANKS:
        if rank.conspiracies_required > proven:
            return rank
    return None
