import random
import sys
import time

from schemas.provider import Provider
from supabase_client import get_supabase

# ───────────────────────────────────────────────────────────────────────────
# Vocabularies
# ───────────────────────────────────────────────────────────────────────────
FIRST_NAMES = [
    "James", "John", "Robert", "Michael", "William", "David", "Richard", "Joseph", "Thomas", "Christopher",
    "Mary", "Patricia", "Jennifer", "Linda", "Barbara", "Elizabeth", "Susan", "Jessica", "Sarah", "Karen",
    "Daniel", "Matthew", "Anthony", "Mark", "Donald", "Steven", "Andrew", "Paul", "Joshua", "Kenneth",
]
LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis", "Rodriguez", "Martinez",
    "Hernandez", "Lopez", "Gonzalez", "Wilson", "Anderson", "Thomas", "Taylor", "Moore", "Jackson", "Martin",
]
CREDENTIALS = ["PhD", "PsyD", "LCSW", "LMFT", "LPC", "MA", "LCPC", "LMHC", "MDiv", "DMin"]
SPECIALTIES = [
    "Anxiety", "Depression", "Trauma & PTSD", "Marriage & Family", "Grief & Loss",
    "Addiction & Recovery", "Stress Management", "Life Transitions", "Burnout",
    "Career Counseling", "Spiritual Direction", "Christian Counseling", "Couples Therapy",
    "Individual Therapy", "Group Therapy", "Self-Esteem", "Relationship Issues",
    "Work-Life Balance", "Identity & Purpose", "Crisis Intervention",
]
CITIES = [
    ("New York", "NY"), ("Chicago", "IL"), ("Houston", "TX"), ("Phoenix", "AZ"), ("Dallas", "TX"),
    ("Austin", "TX"), ("Columbus", "OH"), ("Charlotte", "NC"), ("Seattle", "WA"), ("Denver", "CO"),
    ("Nashville", "TN"), ("Atlanta", "GA"), ("Raleigh", "NC"), ("Minneapolis", "MN"), ("Tampa", "FL"),
]
INSURANCES = [
    "Aetna", "Blue Cross Blue Shield", "Cigna", "UnitedHealthcare", "Humana",
    "Medicare", "Medicaid", "Kaiser Permanente", "Anthem", "TriCare",
]
DURATIONS = ["Day", "Weekend", "Week", "Year-long"]
CONTENT_RESOURCES = ["Books", "Online Courses", "Podcast"]
DENOMINATIONS = [
    "Catholic", "Pentecostal", "Baptist", "Methodist", "Lutheran", "Presbyterian",
    "Anglican/Episcopal", "Non-denominational", "Assembly of God", "Church of Christ",
    "Evangelical", "Reformed",
]
RELATIONAL_SUPPORT = [
    "Spiritual Directors", "Exec/Leadership Coaches", "Financial Guides",
    "Nutrition/Health Coaches", "Mentors",
]
BIOS = [
    "Dedicated to supporting church leaders and ministry professionals navigate the unique challenges of vocational ministry.",
    "Committed to providing compassionate, evidence-based care that honors both psychological science and spiritual growth.",
    "Focused on holistic wellness, integrating mental health, physical well-being, and spiritual formation.",
    "Walking alongside clients as they discover purpose, resilience, and hope in their journey.",
]

# ───────────────────────────────────────────────────────────────────────────
# Generation
# ───────────────────────────────────────────────────────────────────────────
def _subset(rng, pool, lo, hi):
    return rng.sample(pool, k=rng.randint(lo, hi))


def generate_fake_provider(rng: random.Random, index: int) -> dict:
    first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
    city, state = rng.choice(CITIES)
    offers_content = rng.random() < 0.4
    return {
        "name": f"{first} {last}",
        "credentials": ", ".join(_subset(rng, CREDENTIALS, 1, 3)),
        "specialties": _subset(rng, SPECIALTIES, 2, 5),
        "bio": rng.choice(BIOS),
        "phone": f"({rng.randint(100, 999)}) {rng.randint(100, 999)}-{rng.randint(1000, 9999)}",
        "email": f"{first.lower()}.{last.lower()}{index}@example.com",
        "website": f"https://www.{first.lower()}{last.lower()}counseling.com" if rng.random() < 0.6 else None,
        "city": city,
        "state": state,
        "zip_code": str(rng.randint(10000, 99999)),
        "insurance_accepted": _subset(rng, INSURANCES, 2, 6),
        "accepting_new_clients": rng.random() < 0.7,
        "languages": ["English"] if rng.random() >= 0.3 else ["English", rng.choice(["Spanish", "Korean", "French"])],
        "rating": round(rng.uniform(3.0, 5.0), 2),
        "review_count": rng.randint(0, 99),
        "location_type": rng.choice(["in-person", "virtual", "both"]),
        "gloo_scholarship_available": rng.random() < 0.3,
        "service_durations": _subset(rng, DURATIONS, 1, 3),
        "content_resources": offers_content,
        "content_resources_list": _subset(rng, CONTENT_RESOURCES, 1, 3) if offers_content else [],
        "denominations": _subset(rng, DENOMINATIONS, 1, 4),
        "retreat_facilitated": rng.random() < 0.25,
        "actual_therapists": rng.random() < 0.6,
        "general_relational_support": _subset(rng, RELATIONAL_SUPPORT, 1, 3) if rng.random() < 0.5 else [],
        "benevolence_request": rng.random() < 0.35,
    }


def generate_fake_providers(n=500, seed=None) -> list:
    rng = random.Random(seed)
    providers = [generate_fake_provider(rng, i) for i in range(n)]
    # Rows must validate the same way the store reads them back
    for row in providers:
        Provider.model_validate({"id": "pending", **row})
    return providers

# ───────────────────────────────────────────────────────────────────────────
# Upload
# ───────────────────────────────────────────────────────────────────────────
def upload_providers(client, providers, batch_size=100):
    batches = (len(providers) + batch_size - 1) // batch_size
    for i in range(0, len(providers), batch_size):
        batch = providers[i:i + batch_size]
        resp = client.table("providers").insert(batch).execute()
        if not resp.data:
            raise RuntimeError(f"Failed to insert providers batch {i // batch_size + 1}")
        print(f"Inserted batch {i // batch_size + 1} of {batches}", flush=True)
        time.sleep(0.5)


def main(n=500):
    providers = generate_fake_providers(n)
    print(f"Uploading {len(providers)} providers to providers…")
    upload_providers(get_supabase(), providers)
    print(f"Done: {len(providers)} fake providers are in Supabase.")

if __name__ == "__main__":
    main(int(sys.argv[1]) if len(sys.argv) > 1 else 500)
