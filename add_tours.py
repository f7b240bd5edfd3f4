import asyncio
from explorecali.db import init_db, create_tables, get_session
from explorecali.db.unit_of_work import UnitOfWork
from explorecali.models.tour import Difficulty, Region
from explorecali.services.tour import TourService
from explorecali.core.config import get_settings

tour_packages = [
    ("BC", "Backpack Cal"),
    ("CC", "California Calm"),
    ("CH", "California Hot springs"),
    ("CY", "Cycle California"),
    ("DS", "From Desert to Sea"),
    ("KC", "Kids California"),
    ("NW", "Nature Watch"),
    ("SC", "Snowboard Cali"),
    ("TC", "Taste of California"),
]

tours = [
    {
        "title": "Big Sur Retreat",
        "description": "Big Sur is big country. Spend a few days unwinding on the coast.",
        "blurb": "Big Sur is big country.",
        "price": 750,
        "duration": "3 days",
        "bullets": "Accommodations at the historic Big Sur River Inn, Privately guided hikes",
        "keywords": "Hiking, National Parks, Big Sur",
        "tour_package_name": "Backpack Cal",
        "difficulty": Difficulty.Medium,
        "region": "Central Coast",
    },
    {
        "title": "In the Steps of John Muir",
        "description": "Follow the footsteps of John Muir through Yosemite.",
        "blurb": "Follow in the footsteps of John Muir.",
        "price": 600,
        "duration": "3 days",
        "bullets": "Yosemite National Park, Guided hikes",
        "keywords": "Hiking, Yosemite, National Parks",
        "tour_package_name": "Backpack Cal",
        "difficulty": Difficulty.Difficult,
        "region": "Northern California",
    },
    {
        "title": "Coastal Experience",
        "description": "Experience the relaxing pace of the central coast.",
        "blurb": "Relax along the central coast.",
        "price": 1700,
        "duration": "5 days",
        "bullets": "Tour Morro Bay, Spa day, Wine tasting",
        "keywords": "Spa, Wine, Central Coast",
        "tour_package_name": "California Calm",
        "difficulty": Difficulty.Easy,
        "region": "Central Coast",
    },
    {
        "title": "Endangered Species Expedition",
        "description": "Spot rare wildlife with a naturalist guide.",
        "blurb": "Rare wildlife, up close.",
        "price": 600,
        "duration": "3 days",
        "bullets": "Naturalist guide, Condor viewing",
        "keywords": "Wildlife, Birding",
        "tour_package_name": "Nature Watch",
        "difficulty": Difficulty.Medium,
        "region": "Varies",
    },
]


async def add_tours():
    settings = get_settings()
    init_db(settings)
    await create_tables()

    async for session in get_session():
        tour_service = TourService(UnitOfWork(session))
        for code, name in tour_packages:
            await tour_service.create_tour_package(code, name)
        print(f"Tour packages: {len(await tour_service.lookup_packages())}")

        existing_titles = {tour.title for tour in await tour_service.lookup_tours()}
        for tour in tours:
            if tour["title"] in existing_titles:
                print(f"Tour already exists: {tour['title']}")
                continue
            await tour_service.create_tour(**{**tour, "region": Region.find_by_label(tour["region"])})
            print(f"Added tour: {tour['title']}")

        print(f"Number of tours = {await tour_service.total()}")


if __name__ == "__main__":
    asyncio.run(add_tours())
