"""Conspiracy Clicker content: generators, shops, quests and achievements."""
from __future__ import annotations

from conspiracyengine.achievement import AchievementDef, AchievementType
from conspiracyengine.catalog import ContentCatalog
from conspiracyengine.daily import ChallengeTemplate, ChallengeType
from conspiracyengine.effect import Modifier
from conspiracyengine.generator import GeneratorDef
from conspiracyengine.quest import QuestDef, QuestRisk
from conspiracyengine.requirement import Req
from conspiracyengine.upgrade import (
    ConspiracyDef,
    Currency,
    MatrixUpgradeDef,
    PrestigeUpgradeDef,
    SkillDef,
    UpgradeDef,
)


# ── Generators ───────────────────────────────────────────────────────

GENERATORS = [
    GeneratorDef(
        "red_string", "Red String",
        base_cost=15, base_production=1, cost_multiplier=1.15,
        flavor_text="Connects random photos on your cork board. Sometimes to itself.",
    ),
    GeneratorDef(
        "suspicious_neighbor", "Suspicious Neighbor",
        base_cost=100, base_production=5, cost_multiplier=1.15, believer_bonus=1,
        flavor_text="He's 'just gardening' at 3 AM. Sure, Gary.",
    ),
    GeneratorDef(
        "basement_researcher", "Basement Researcher",
        base_cost=1_100, base_production=30, cost_multiplier=1.15, believer_bonus=3,
        flavor_text="Hasn't seen sunlight in 47 days. Living the dream.",
    ),
    GeneratorDef(
        "blogspot_blog", "Blogspot Blog",
        base_cost=12_000, base_production=200, cost_multiplier=1.14, believer_bonus=10,
        flavor_text="Est. 2004. Still using the same background.",
    ),
    GeneratorDef(
        "youtube_channel", "YouTube Channel",
        base_cost=130_000, base_production=1_400, cost_multiplier=1.14, believer_bonus=50,
        flavor_text="Please like, subscribe, and question everything.",
    ),
    GeneratorDef(
        "discord_server", "Discord Server",
        base_cost=1.4e6, base_production=1e4, cost_multiplier=1.13, believer_bonus=200,
        flavor_text="2,000 members. 3 actually active. All named Kyle.",
    ),
    GeneratorDef(
        "am_radio", "AM Radio Show",
        base_cost=2e7, base_production=7.5e4, cost_multiplier=1.13, believer_bonus=400,
        flavor_text="Broadcasting truth between mattress ads.",
    ),
    GeneratorDef(
        "podcast", "4-Hour Podcast",
        base_cost=3.3e8, base_production=5e5, cost_multiplier=1.12, believer_bonus=1_500,
        flavor_text="Joe called. He wants his format back.",
    ),
    GeneratorDef(
        "truth_conference", "Truth Conference",
        base_cost=5.1e9, base_production=3.6e6, cost_multiplier=1.12, believer_bonus=5_000,
        flavor_text="Holiday Inn Express. Complimentary tinfoil.",
    ),
    GeneratorDef(
        "netflix_doc", "Netflix Documentary",
        base_cost=7.5e10, base_production=2.6e7, cost_multiplier=1.11, believer_bonus=15_000,
        flavor_text="Suspiciously professional. Almost TOO credible...",
    ),
    GeneratorDef(
        "spy_satellite", "Spy Satellite",
        base_cost=1e12, base_production=1.9e8, cost_multiplier=1.11, believer_bonus=40_000,
        flavor_text="Definitely not stolen from eBay. No questions.",
    ),
    GeneratorDef(
        "shadow_government", "Shadow Government",
        base_cost=1.4e13, base_production=1.4e9, cost_multiplier=1.10, believer_bonus=100_000,
        flavor_text="You've become the deep state. Congrats?",
    ),
]


# ── Evidence shop ────────────────────────────────────────────────────

# (id, name, flat click power, cost, lifetime evidence to unlock)
_CLICK_POWER = [
    ("sticky_notes", "Sticky Notes", 0.1, 90, 30),
    ("reinforced_tinfoil", "Reinforced Tinfoil Hat", 0.2, 300, 150),
    ("notebook", "Spiral Notebook", 0.3, 600, 300),
    ("magnifying_glass", "Magnifying Glass", 0.5, 1_200, 600),
    ("flashlight", "Heavy Duty Flashlight", 0.7, 2_400, 1_200),
    ("red_marker", "Red Marker", 1, 4_800, 2_400),
    ("binoculars", "Surveillance Binoculars", 1.5, 9_000, 4_500),
    ("cork_board", "Premium Cork Board", 2, 18_000, 9_000),
    ("scanner", "Document Scanner", 3, 36_000, 18_000),
    ("night_vision", "Night Vision Goggles", 4, 90_000, 45_000),
    ("voice_recorder", "Concealed Voice Recorder", 6, 180_000, 90_000),
    ("mechanical_keyboard", "Mechanical Keyboard", 8, 450_000, 210_000),
    ("encrypted_usb", "Encrypted USB Drive", 15, 1.5e6, 7.5e5),
    ("burner_phone", "Burner Phone Collection", 30, 6e6, 3e6),
    ("satellite_dish", "DIY Satellite Dish", 60, 3e7, 1.5e7),
]

_CLICK_MULTIPLIER = [
    ("third_eye_drops", "Third Eye Drops", 1.1, 6e5, 3e5),
    ("caffeine_iv", "Caffeine IV Drip", 1.15, 6e6, 3e6),
    ("quantum_fingers", "Quantum Fingers", 1.2, 6e7, 3e7),
    ("truth_serum", "Truth Serum", 1.25, 3e8, 1.5e8),
]

_EPS_TO_CLICK = [
    ("finger_on_pulse", "Finger on the Pulse", 0.01, 3e5, 1.5e5),
    ("active_investigation", "Active Investigation", 0.02, 3e6, 1.5e6),
    ("momentum_theory", "Momentum Theory", 0.03, 3e7, 1.5e7),
    ("synergy_doctrine", "Synergy Doctrine", 0.04, 3e8, 1.5e8),
]

_GLOBAL = [
    ("viral_momentum", "Viral Momentum", 1.10, 6e7, 3e7),
    ("mass_awakening", "Mass Awakening", 1.25, 6e8, 3e8),
    ("truth_singularity", "Truth Singularity", 1.50, 6e9, 3e9),
    ("collective_consciousness", "Collective Consciousness", 1.75, 6e10, 3e10),
    ("great_revelation", "The Great Revelation", 2.0, 6e11, 3e11),
    ("ascended_knowledge", "Ascended Knowledge", 3.0, 6e12, 3e12),
]

# (id, name, generator, multiplier, cost, generators owned to unlock)
_GENERATOR_BOOSTS = [
    ("premium_string", "Premium Red String", "red_string", 2.0, 6_000, 10),
    ("red_string_quantum", "Quantum Entangled String", "red_string", 5.0, 3e6, 25),
    ("red_string_infinite", "Infinite String Theory", "red_string", 10.0, 3e8, 50),
    ("neighborhood_watch", "Neighborhood Watch", "suspicious_neighbor", 2.0, 30_000, 10),
    ("neighbor_network", "Global Neighbor Network", "suspicious_neighbor", 5.0, 6e6, 25),
    ("neighbor_hivemind", "Neighborhood Hivemind", "suspicious_neighbor", 10.0, 6e8, 50),
    ("ergonomic_chair", "Ergonomic Gaming Chair", "basement_researcher", 2.0, 150_000, 10),
    ("researcher_ascension", "Researcher Ascension", "basement_researcher", 5.0, 3e7, 25),
    ("seo_optimization", "SEO Optimization", "blogspot_blog", 2.0, 9e5, 10),
    ("blog_empire", "Blogspot Empire", "blogspot_blog", 5.0, 1.5e8, 25),
    ("clickbait_thumbnails", "Clickbait Thumbnails", "youtube_channel", 2.0, 9e6, 10),
    ("youtube_algorithm", "Algorithm Manipulation", "youtube_channel", 5.0, 6e8, 25),
    ("discord_bots", "Discord Bot Army", "discord_server", 2.0, 6e7, 10),
    ("am_radio_tower", "Boosted AM Tower", "am_radio", 2.0, 3e8, 10),
    ("podcast_sponsorships", "Suspicious Sponsorships", "podcast", 2.0, 1.5e9, 10),
    ("conference_keynotes", "Keynote Speaking Tour", "truth_conference", 2.0, 9e9, 10),
    ("netflix_promotion", "Netflix Algorithm Hack", "netflix_doc", 2.0, 6e10, 5),
    ("satellite_network", "Orbital Network", "spy_satellite", 2.0, 4.5e11, 5),
    ("shadow_government_expansion", "Shadow Government Expansion", "shadow_government", 2.0, 3e12, 3),
]


def _evidence_upgrades() -> list[UpgradeDef]:
    upgrades: list[UpgradeDef] = []
    for uid, name, value, cost, unlock in _CLICK_POWER:
        upgrades.append(UpgradeDef(
            uid, name, f"+{value:g} click power", cost=cost,
            effects=[Modifier.click_flat(value)],
            requirements=[Req.total_evidence(">=", unlock)],
        ))
    for uid, name, value, cost, unlock in _CLICK_MULTIPLIER:
        upgrades.append(UpgradeDef(
            uid, name, f"x{value:g} click power", cost=cost,
            effects=[Modifier.click_mult(value)],
            requirements=[Req.total_evidence(">=", unlock)],
        ))
    for uid, name, value, cost, unlock in _EPS_TO_CLICK:
        upgrades.append(UpgradeDef(
            uid, name, f"Clicks gain {value:.0%} of EPS", cost=cost,
            effects=[Modifier.eps_to_click(value)],
            requirements=[Req.total_evidence(">=", unlock)],
        ))
    for uid, name, value, cost, unlock in _GLOBAL:
        upgrades.append(UpgradeDef(
            uid, name, f"x{value:g} evidence per second", cost=cost,
            effects=[Modifier.global_eps(value)],
            requirements=[Req.total_evidence(">=", unlock)],
        ))
    for uid, name, gen, value, cost, owned in _GENERATOR_BOOSTS:
        upgrades.append(UpgradeDef(
            uid, name, f"x{value:g} {gen} production", cost=cost,
            effects=[Modifier.generator(gen, value)],
            requirements=[Req.owns(gen, owned)],
        ))
    return upgrades


# ── Tinfoil shop ─────────────────────────────────────────────────────

def _tinfoil(uid: str, name: str, description: str, cost: int, effect) -> UpgradeDef:
    return UpgradeDef(
        uid, name, description, cost=cost, currency=Currency.TINFOIL, effects=[effect]
    )


TINFOIL_UPGRADES = [
    _tinfoil("tinfoil_hat_basic", "Basic Tinfoil Hat", "x1.25 click power", 10, Modifier.click_mult(1.25)),
    _tinfoil("tinfoil_hat_reinforced", "Reinforced Tinfoil Helmet", "x1.5 click power", 50, Modifier.click_mult(1.5)),
    _tinfoil("tinfoil_hat_deluxe", "Deluxe Tinfoil Crown", "x2 click power", 200, Modifier.click_mult(2.0)),
    _tinfoil("deep_state_contact", "Deep State Contact", "x1.15 evidence per second", 25, Modifier.global_eps(1.15)),
    _tinfoil("deep_state_insider", "Deep State Insider", "x1.35 evidence per second", 100, Modifier.global_eps(1.35)),
    _tinfoil("deep_state_operative", "Deep State Operative", "x1.75 evidence per second", 500, Modifier.global_eps(1.75)),
    _tinfoil("lucky_rabbit_foot", "Lucky Rabbit's Foot", "+5% quest success", 15, Modifier.quest_success(0.05)),
    _tinfoil("four_leaf_clover", "Four-Leaf Clover", "+10% quest success", 75, Modifier.quest_success(0.10)),
    _tinfoil("lucky_horseshoe", "Lucky Horseshoe", "+15% quest success", 250, Modifier.quest_success(0.15)),
    _tinfoil("charisma_training", "Charisma Training", "x1.2 believers", 30, Modifier.believers(1.2)),
    _tinfoil("cult_leadership", "Cult Leadership 101", "x1.4 believers", 150, Modifier.believers(1.4)),
    _tinfoil("mass_hypnosis", "Mass Hypnosis", "x2 believers", 600, Modifier.believers(2.0)),
    _tinfoil("clicking_intern", "Clicking Intern", "+1 auto-click per second", 50, Modifier.auto_click(1)),
    _tinfoil("clicking_robot", "Clicking Robot", "+3 auto-clicks per second", 200, Modifier.auto_click(3)),
    _tinfoil("quantum_clicker", "Quantum Clicker", "+10 auto-clicks per second", 1_000, Modifier.auto_click(10)),
    _tinfoil("lucky_guess", "Lucky Guess", "+5% critical chance", 40, Modifier.crit_chance(0.05)),
    _tinfoil("educated_guess", "Educated Guess", "+5% critical chance", 175, Modifier.crit_chance(0.05)),
    _tinfoil("prophetic_vision", "Prophetic Vision", "+10% critical chance", 750, Modifier.crit_chance(0.10)),
]


# ── Conspiracies ─────────────────────────────────────────────────────

# (id, name, lifetime evidence, tinfoil reward, click bonus, click multiplier)
_CONSPIRACIES = [
    ("birds_arent_real", "Birds Aren't Real", 5e5, 1, 1, 1.0),
    ("mattress_laundering", "Mattress Store Money Laundering", 8e6, 2, 2, 1.0),
    ("moon_landing", "Moon Landing Faked", 1.5e8, 3, 5, 1.0),
    ("flat_earth", "Flat Earth", 3.5e9, 5, 10, 1.0),
    ("australia_fake", "Australia Doesn't Exist", 1e11, 8, 20, 1.0),
    ("finland_myth", "Finland is a Myth", 3.5e12, 12, 40, 1.0),
    ("lizard_people", "Lizard People", 1.2e14, 20, 80, 1.0),
    ("denver_airport", "Denver Airport Underground", 5e15, 35, 150, 1.0),
    ("antarctica_treaty", "Antarctica Treaty Secret", 2e17, 50, 300, 1.0),
    ("you_are_conspiracy", "You ARE the Conspiracy", 1e19, 100, 0, 2.0),
]


def _conspiracies() -> list[ConspiracyDef]:
    result: list[ConspiracyDef] = []
    for cid, name, cost, tinfoil, bonus, mult in _CONSPIRACIES:
        effects = []
        if bonus:
            effects.append(Modifier.click_flat(bonus))
        if mult != 1.0:
            effects.append(Modifier.click_mult(mult))
        result.append(ConspiracyDef(
            cid, name, f"Prove with {cost:g} lifetime evidence",
            evidence_cost=cost, tinfoil_reward=tinfoil, effects=effects,
        ))
    return result


# ── Quests ───────────────────────────────────────────────────────────

QUESTS = [
    QuestDef(
        "recon_mission", "Reconnaissance Mission", "Scout the suspicious van outside.",
        risk=QuestRisk.LOW, believers_required=20, duration_seconds=120,
        success_chance=0.90, evidence_multiplier=100, tinfoil_reward=2,
    ),
    QuestDef(
        "chemtrail_sample", "Chemtrail Sample Collection", "Bring a jar. Hold it up high.",
        risk=QuestRisk.LOW, believers_required=50, duration_seconds=180,
        success_chance=0.88, evidence_multiplier=150, tinfoil_reward=4,
    ),
    QuestDef(
        "document_recovery", "Document Recovery", "Dig through the shredder bins.",
        risk=QuestRisk.LOW, believers_required=100, duration_seconds=240,
        success_chance=0.85, evidence_multiplier=200, tinfoil_reward=6, believer_reward=10,
    ),
    QuestDef(
        "whistleblower_extraction", "Whistleblower Extraction", "Get them out before they're 'suicided'.",
        risk=QuestRisk.MEDIUM, believers_required=250, duration_seconds=300,
        success_chance=0.70, evidence_multiplier=350, tinfoil_reward=12,
    ),
    QuestDef(
        "signal_intercept", "Signal Intercept Operation", "Tune the ham radio to the forbidden frequency.",
        risk=QuestRisk.MEDIUM, believers_required=400, duration_seconds=480,
        success_chance=0.65, evidence_multiplier=600, tinfoil_reward=20,
    ),
    QuestDef(
        "facility_infiltration", "Facility Infiltration", "Wear a hi-vis vest and carry a clipboard.",
        risk=QuestRisk.MEDIUM, believers_required=1_500, duration_seconds=720,
        success_chance=0.55, evidence_multiplier=1_500, tinfoil_reward=40, believer_reward=50,
    ),
    QuestDef(
        "black_site_raid", "Black Site Raid", "Not everyone comes back.",
        risk=QuestRisk.HIGH, believers_required=5_000, duration_seconds=1_200,
        success_chance=0.38, evidence_multiplier=8_000, tinfoil_reward=150,
    ),
    QuestDef(
        "haarp_investigation", "HAARP Investigation", "The weather is acting weird again.",
        risk=QuestRisk.HIGH, believers_required=25_000, duration_seconds=1_200,
        success_chance=0.35, evidence_multiplier=25_000, tinfoil_reward=300,
    ),
    QuestDef(
        "shadow_council", "Shadow Council Infiltration", "Get a seat at the table. Any table.",
        risk=QuestRisk.HIGH, believers_required=50_000, duration_seconds=1_500,
        success_chance=0.18, evidence_multiplier=100_000, tinfoil_reward=1_000,
    ),
]


# ── Achievements ─────────────────────────────────────────────────────

# (id, name, type, threshold, tinfoil reward, generator target)
_ACHIEVEMENTS = [
    ("evidence_100", "Curious", AchievementType.TOTAL_EVIDENCE, 100, 1, ""),
    ("evidence_10k", "Suspicious", AchievementType.TOTAL_EVIDENCE, 1e4, 2, ""),
    ("evidence_1m", "Paranoid", AchievementType.TOTAL_EVIDENCE, 1e6, 5, ""),
    ("evidence_1b", "Obsessed", AchievementType.TOTAL_EVIDENCE, 1e9, 10, ""),
    ("evidence_1t", "Enlightened", AchievementType.TOTAL_EVIDENCE, 1e12, 25, ""),
    ("evidence_1q", "Quadrillionaire Truther", AchievementType.TOTAL_EVIDENCE, 1e15, 50, ""),
    ("clicks_100", "Clicker", AchievementType.TOTAL_CLICKS, 100, 1, ""),
    ("clicks_1000", "Dedicated Clicker", AchievementType.TOTAL_CLICKS, 1_000, 2, ""),
    ("clicks_10000", "Carpal Tunnel", AchievementType.TOTAL_CLICKS, 10_000, 5, ""),
    ("clicks_100000", "Finger of Truth", AchievementType.TOTAL_CLICKS, 100_000, 10, ""),
    ("strings_100", "Tangled Web", AchievementType.GENERATOR_OWNED, 100, 3, "red_string"),
    ("neighbors_50", "Block Party", AchievementType.GENERATOR_OWNED, 50, 3, "suspicious_neighbor"),
    ("researchers_25", "Basement Dwellers", AchievementType.GENERATOR_OWNED, 25, 3, "basement_researcher"),
    ("youtube_10", "Monetization Pending", AchievementType.GENERATOR_OWNED, 10, 5, "youtube_channel"),
    ("podcast_5", "Podcast Industrial Complex", AchievementType.GENERATOR_OWNED, 5, 8, "podcast"),
    ("spy_satellite_1", "Eye in the Sky", AchievementType.GENERATOR_OWNED, 1, 10, "spy_satellite"),
    ("shadow_gov_1", "Power Behind the Throne", AchievementType.GENERATOR_OWNED, 1, 15, "shadow_government"),
    ("conspiracy_1", "Truther", AchievementType.CONSPIRACIES_PROVEN, 1, 2, ""),
    ("conspiracy_5", "Red-Pilled", AchievementType.CONSPIRACIES_PROVEN, 5, 5, ""),
    ("conspiracy_10", "Red-Pill Master", AchievementType.CONSPIRACIES_PROVEN, 10, 10, ""),
    ("playtime_1h", "Just Getting Started", AchievementType.PLAY_TIME, 3_600, 2, ""),
    ("playtime_10h", "Dedicated Researcher", AchievementType.PLAY_TIME, 36_000, 10, ""),
    ("ascend_1", "Illuminated", AchievementType.TIMES_ASCENDED, 1, 10, ""),
    ("ascend_5", "Inner Circle", AchievementType.TIMES_ASCENDED, 5, 25, ""),
    ("ascend_10", "Grand Master", AchievementType.TIMES_ASCENDED, 10, 50, ""),
    ("matrix_1", "Red Pill", AchievementType.TIMES_MATRIX_BROKEN, 1, 50, ""),
    ("matrix_3", "The Architect's Concern", AchievementType.TIMES_MATRIX_BROKEN, 3, 100, ""),
    ("quest_1", "Field Agent", AchievementType.QUESTS_COMPLETED, 1, 2, ""),
    ("quest_10", "Seasoned Operative", AchievementType.QUESTS_COMPLETED, 10, 5, ""),
    ("quest_50", "Mission Control", AchievementType.QUESTS_COMPLETED, 50, 15, ""),
    ("crit_10", "Lucky Strike", AchievementType.CRITICAL_CLICKS, 10, 2, ""),
    ("crit_100", "Precision Truther", AchievementType.CRITICAL_CLICKS, 100, 5, ""),
    ("crit_1000", "Critical Mass", AchievementType.CRITICAL_CLICKS, 1_000, 15, ""),
    ("tokens_10", "Illuminati Initiate", AchievementType.TOTAL_TOKENS_EARNED, 10, 20, ""),
    ("tokens_100", "Illuminati Master", AchievementType.TOTAL_TOKENS_EARNED, 100, 100, ""),
    ("tinfoil_100", "Tinfoil Hatter", AchievementType.TOTAL_TINFOIL, 100, 5, ""),
    ("tinfoil_1000", "Foil Fortress", AchievementType.TOTAL_TINFOIL, 1_000, 25, ""),
    ("generators_100", "Network Effect", AchievementType.TOTAL_GENERATORS, 100, 5, ""),
]


def _achievements() -> list[AchievementDef]:
    return [
        AchievementDef(aid, atype, threshold, display_name=name, target=target,
                       tinfoil_reward=reward)
        for aid, name, atype, threshold, reward, target in _ACHIEVEMENTS
    ]


# ── Skill tree ───────────────────────────────────────────────────────

SKILLS = [
    # Researcher branch
    SkillDef("research_basics", "Research Basics", "+10% evidence per second",
             cost=1, effects=[Modifier.global_eps(1.10)]),
    SkillDef("speed_reading", "Speed Reading", "+15% evidence per second",
             cost=2, required_skill="research_basics", effects=[Modifier.global_eps(1.15)]),
    SkillDef("data_mining", "Data Mining", "+25% evidence per second",
             cost=3, required_skill="speed_reading", effects=[Modifier.global_eps(1.25)]),
    SkillDef("quantum_analysis", "Quantum Analysis", "+50% evidence per second",
             cost=5, required_skill="data_mining", effects=[Modifier.global_eps(1.5)]),
    SkillDef("omniscience", "Omniscience", "x2 evidence per second",
             cost=8, required_skill="quantum_analysis", effects=[Modifier.global_eps(2.0)]),
    # Influencer branch
    SkillDef("charisma", "Natural Charisma", "+10% believers",
             cost=1, effects=[Modifier.believers(1.10)]),
    SkillDef("persuasion", "Persuasion", "+15% believers",
             cost=2, required_skill="charisma", effects=[Modifier.believers(1.15)]),
    SkillDef("viral_marketing", "Viral Marketing", "+10% quest success chance",
             cost=3, required_skill="persuasion", effects=[Modifier.quest_success(0.10)]),
    SkillDef("cult_of_personality", "Cult of Personality", "+50% believers, +25% quest rewards",
             cost=5, required_skill="viral_marketing",
             effects=[Modifier.believers(1.5), Modifier.quest_reward(1.25)]),
    SkillDef("mind_control", "Mind Control", "x2 believers, quests never fail",
             cost=8, required_skill="cult_of_personality",
             effects=[Modifier.believers(2.0), Modifier.quest_always_succeeds()]),
    # Clicker branch
    SkillDef("quick_fingers", "Quick Fingers", "+15% click power",
             cost=1, effects=[Modifier.click_mult(1.15)]),
    SkillDef("precision_clicking", "Precision Clicking", "+5% critical hit chance",
             cost=2, required_skill="quick_fingers", effects=[Modifier.crit_chance(0.05)]),
    SkillDef("combo_master", "Combo Master", "Combo meter fills 25% faster",
             cost=3, required_skill="precision_clicking", effects=[Modifier.combo_fill(1.25)]),
    SkillDef("deadly_precision", "Deadly Precision", "+10% crit chance, crits hit 50% harder",
             cost=5, required_skill="combo_master",
             effects=[Modifier.crit_chance(0.10), Modifier.crit_damage(1.5)]),
    SkillDef("one_with_the_click", "One With The Click", "x2 click power, +1 auto-click/sec",
             cost=8, required_skill="deadly_precision",
             effects=[Modifier.click_mult(2.0), Modifier.auto_click(1)]),
]


# ── Illuminati shop ──────────────────────────────────────────────────

PRESTIGE_UPGRADES = [
    PrestigeUpgradeDef("pyramid_scheme", "Pyramid Scheme", "x100 evidence per second",
                       token_cost=1, effects=[Modifier.global_eps(100)]),
    PrestigeUpgradeDef("reptilian_dna", "Reptilian DNA Injection", "x100 evidence per second",
                       token_cost=2, effects=[Modifier.global_eps(100)]),
    PrestigeUpgradeDef("secret_handshake", "Secret Handshake", "x50 click power",
                       token_cost=2, effects=[Modifier.click_mult(50)]),
    PrestigeUpgradeDef("new_world_order_discount", "New World Order Discount", "-90% generator costs",
                       token_cost=3, effects=[Modifier.cost(0.1)]),
    PrestigeUpgradeDef("deep_state_connections", "Deep State Connections", "x50 evidence per second",
                       token_cost=3, effects=[Modifier.global_eps(50)]),
    PrestigeUpgradeDef("auto_clicker", "Automated Truth Dispenser", "+20 automatic clicks per second",
                       token_cost=4, effects=[Modifier.auto_click(20)]),
    PrestigeUpgradeDef("moon_base_alpha", "Moon Base Alpha Access", "+500% quest rewards",
                       token_cost=5, effects=[Modifier.quest_reward(6.0)]),
    PrestigeUpgradeDef("time_manipulation", "Time Manipulation Device", "-90% quest duration",
                       token_cost=5, effects=[Modifier.quest_duration(0.1)]),
    PrestigeUpgradeDef("believer_magnetism", "Believer Magnetism", "+500% believers",
                       token_cost=6, effects=[Modifier.believers(6.0)]),
    PrestigeUpgradeDef("all_seeing_investment", "All-Seeing Investment",
                       "+25% evidence per Illuminati Token owned",
                       token_cost=8, effects=[Modifier.per_token_eps(0.25)]),
    PrestigeUpgradeDef("infinite_tinfoil", "Infinite Tinfoil Supply", "+200 tinfoil per minute",
                       token_cost=10, effects=[Modifier.passive_tinfoil(200)]),
    PrestigeUpgradeDef("third_eye_awakening", "Third Eye Awakening",
                       "+100% critical hit chance, crits deal 10x more",
                       token_cost=12, effects=[Modifier.crit_chance(1.0), Modifier.crit_damage(10)]),
    PrestigeUpgradeDef("shadow_network", "Shadow Network", "-95% generator costs",
                       token_cost=15, effects=[Modifier.cost(0.05)]),
    PrestigeUpgradeDef("parallel_universe_access", "Parallel Universe Access",
                       "x10 all generator production",
                       token_cost=18, effects=[Modifier.all_generators(10)]),
    PrestigeUpgradeDef("omniscient_vision", "Omniscient Vision",
                       "Quests always succeed and finish 80% faster",
                       token_cost=100,
                       effects=[Modifier.quest_always_succeeds(), Modifier.quest_duration(0.2)]),
]


# ── Matrix shop ──────────────────────────────────────────────────────

MATRIX_UPGRADES = [
    MatrixUpgradeDef("reality_warp", "Reality Warp", "x3 evidence per second",
                     glitch_cost=1, effects=[Modifier.global_eps(3)]),
    MatrixUpgradeDef("neo_clicking", "Neo Clicking", "Clicks scale with 2% of EPS instead of 1%",
                     glitch_cost=1, effects=[Modifier.eps_to_click(0.01)]),
    MatrixUpgradeDef("agent_infiltration", "Agent Infiltration", "+100% quest success (before cap)",
                     glitch_cost=2, effects=[Modifier.quest_success(1.0)]),
    MatrixUpgradeDef("source_code_access", "Source Code Access", "x2 believers",
                     glitch_cost=2, effects=[Modifier.believers(2.0)]),
    MatrixUpgradeDef("bullet_time", "Bullet Time", "x5 critical hit multiplier",
                     glitch_cost=3, effects=[Modifier.crit_damage(5.0)]),
    MatrixUpgradeDef("oracle_vision", "Oracle Vision", "Believers survive failed high-risk quests",
                     glitch_cost=3, effects=[Modifier.protect_believers()]),
    MatrixUpgradeDef("architect_meeting", "Architect Meeting", "-50% generator costs",
                     glitch_cost=4, effects=[Modifier.cost(0.5)]),
    MatrixUpgradeDef("red_pill_factory", "Red Pill Factory", "+5 tinfoil per minute",
                     glitch_cost=5, effects=[Modifier.passive_tinfoil(5)]),
    MatrixUpgradeDef("zion_mainframe", "Zion Mainframe", "Keep 10% of evidence through ascension",
                     glitch_cost=8, effects=[Modifier.retain_evidence(0.10)]),
    MatrixUpgradeDef("the_one", "The One", "x10 all production",
                     glitch_cost=15, effects=[Modifier.global_eps(10)]),
]


# ── Daily challenges ─────────────────────────────────────────────────

CHALLENGE_TEMPLATES = [
    ChallengeTemplate("clicks_50", "Warm Up", "Click 50 times", ChallengeType.CLICK_COUNT, 50, 2),
    ChallengeTemplate("clicks_200", "Clicker", "Click 200 times", ChallengeType.CLICK_COUNT, 200, 4),
    ChallengeTemplate("clicks_500", "Click Enthusiast", "Click 500 times", ChallengeType.CLICK_COUNT, 500, 8),
    ChallengeTemplate("clicks_1000", "Click Frenzy", "Click 1000 times", ChallengeType.CLICK_COUNT, 1000, 15),
    ChallengeTemplate("crits_5", "Lucky Strikes", "Land 5 critical hits", ChallengeType.CRITICAL_HITS, 5, 3),
    ChallengeTemplate("crits_15", "Critical Thinker", "Land 15 critical hits", ChallengeType.CRITICAL_HITS, 15, 7),
    ChallengeTemplate("crits_30", "Precision Master", "Land 30 critical hits", ChallengeType.CRITICAL_HITS, 30, 12),
    ChallengeTemplate("combos_2", "Combo Starter", "Trigger 2 combo bursts", ChallengeType.COMBO_COUNT, 2, 4),
    ChallengeTemplate("combos_5", "Combo King", "Trigger 5 combo bursts", ChallengeType.COMBO_COUNT, 5, 8),
    ChallengeTemplate("combos_10", "Combo Legend", "Trigger 10 combo bursts", ChallengeType.COMBO_COUNT, 10, 15),
    ChallengeTemplate("quests_1", "Quest Beginner", "Complete 1 quest", ChallengeType.COMPLETE_QUESTS, 1, 5),
    ChallengeTemplate("quests_2", "Quest Master", "Complete 2 quests", ChallengeType.COMPLETE_QUESTS, 2, 10),
    ChallengeTemplate("evidence_10k", "Evidence Hoarder", "Collect 10K evidence today",
                      ChallengeType.COLLECT_EVIDENCE, 1e4, 3),
    ChallengeTemplate("evidence_1m", "Evidence Baron", "Collect 1M evidence today",
                      ChallengeType.COLLECT_EVIDENCE, 1e6, 10),
]


def define_catalog() -> ContentCatalog:
    """Build the full Conspiracy Clicker catalog."""
    return ContentCatalog(
        generators=GENERATORS,
        upgrades=_evidence_upgrades() + TINFOIL_UPGRADES,
        conspiracies=_conspiracies(),
        quests=QUESTS,
        achievements=_achievements(),
        prestige_upgrades=PRESTIGE_UPGRADES,
        matrix_upgrades=MATRIX_UPGRADES,
        skills=SKILLS,
        challenge_templates=CHALLENGE_TEMPLATES,
    )
