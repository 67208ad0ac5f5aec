"""
Default site content, keyed by content type slug.

Used by `POST /content/{type}/seed` to populate a fresh database. Payloads
go through the same schema validation as admin writes.
"""

from typing import Any, Dict, List

SEED_DATA: Dict[str, List[Dict[str, Any]]] = {
    "banner": [
        {
            "title": {
                "en": "Building Dreams, Creating Reality",
                "de": "Träume bauen, Realität schaffen",
                "al": "Duke ndërtuar ëndrrat, duke krijuar realitet",
            },
            "subtitle": {
                "en": (
                    "We specialize in transforming your vision into exceptional spaces. "
                    "Our team of experts brings creativity, precision, and innovation to every project."
                ),
                "de": (
                    "Wir sind darauf spezialisiert, Ihre Vision in außergewöhnliche Räume zu verwandeln. "
                    "Unser Expertenteam bringt Kreativität, Präzision und Innovation in jedes Projekt ein."
                ),
                "al": (
                    "Ne specializohemi në transformimin e vizionit tuaj në hapësira të jashtëzakonshme. "
                    "Ekipi ynë i ekspertëve sjell kreativitet, precizion dhe inovacion në çdo projekt."
                ),
            },
            "image": "/assets/image1.png",
            "isActive": True,
        }
    ],
    "about-banner": [
        {
            "title": {"en": "About Us", "de": "Über Uns", "al": "Rreth Nesh"},
            "subtitle": {
                "en": "We are a leading construction company dedicated to building excellence and innovation.",
                "de": "Wir sind ein führendes Bauunternehmen, das sich der Exzellenz und Innovation verschrieben hat.",
                "al": "Ne jemi një kompani ndërtimi kryesore e dedikuar për shkëlqim dhe inovacion.",
            },
            "image": "/assets/aboutBannerImage.png",
            "video": "/assets/EASY_BUILD_1 (1).mp4",
            "isActive": True,
        }
    ],
    "about-us": [
        {
            "title": {
                "en": "Building Excellence Through Innovation",
                "de": "Exzellenz durch Innovation aufbauen",
                "al": "Ndërtimi i Shkëlqimit përmes Inovacionit",
            },
            "description": {
                "en": "With years of experience and a commitment to quality, we deliver outstanding results.",
                "de": "Mit jahrelanger Erfahrung und einem Engagement für Qualität liefern wir herausragende Ergebnisse.",
                "al": "Me vite përvojë dhe një angazhim për cilësi, ne ofrojmë rezultate të shkëlqyeshme.",
            },
            "missionDescription": {
                "en": "Our mission is to transform visions into reality through superior craftsmanship.",
                "de": "Unsere Mission ist es, Visionen durch überlegene Handwerkskunst Wirklichkeit werden zu lassen.",
                "al": "Misioni ynë është të transformojmë vizionet në realitet përmes mjeshtërisë së shkëlqyer.",
            },
            "images": [
                "/assets/IMG_3864.JPG",
                "/assets/IMG_3865.png",
                "/assets/IMG_3866.JPG",
            ],
            "isActive": True,
        }
    ],
    "team": [
        {
            "title": {"en": "Our Team", "de": "Unser Team", "al": "Ekipi Ynë"},
            "firstDescription": {
                "en": "We are a dedicated team of construction professionals committed to exceptional results.",
                "de": "Wir sind ein engagiertes Team von Bauprofis, die außergewöhnliche Ergebnisse liefern.",
                "al": "Ne jemi një ekip i dedikuar profesionistësh ndërtimi që ofrojnë rezultate të jashtëzakonshme.",
            },
            "secondDescription": {
                "en": "Our team keeps up with the latest construction technologies and sustainable practices.",
                "de": "Unser Team bleibt auf dem neuesten Stand der Bautechnologien und nachhaltigen Baupraktiken.",
                "al": "Ekipi ynë mbahet i përditësuar me teknologjitë më të fundit dhe praktikat e qëndrueshme.",
            },
            "image": "/assets/ourteam1.png",
            "isActive": True,
        }
    ],
    "step-by-step": [
        {
            "title": {"en": "Step by Step", "de": "Schritt für Schritt", "al": "Hapë pas hapi"},
            "description": {
                "en": "Our projects showcase the versatility and efficiency of lightweight construction.",
                "de": "Unsere Projekte zeigen die Vielseitigkeit und Effizienz des Leichtbaus.",
                "al": "Projektet tona tregojnë shumëllojshmërinë dhe efikasitetin e ndërtimit të lehtë.",
            },
            "images": ["/assets/step1.png", "/assets/step2.png", "/assets/step3.png"],
            "isActive": True,
        }
    ],
    "project": [
        {
            "title": {
                "en": "Modern Office Building",
                "de": "Modernes Bürogebäude",
                "al": "Ndërtesa Moderne e Zyrave",
            },
            "description": {
                "en": "A state-of-the-art office complex featuring sustainable design and smart building technology.",
                "de": "Ein hochmoderner Bürokomplex mit nachhaltigem Design und intelligenter Gebäudetechnologie.",
                "al": "Një kompleks zyrash ultra-modern me dizajn të qëndrueshëm dhe teknologji të zgjuar.",
            },
            "mainImage": "/assets/image1.png",
            "additionalImages": [
                "/assets/banner-1755681083952.jpg",
                "/assets/banner-1755681378587.jpg",
            ],
        },
        {
            "title": {"en": "Residential Complex", "de": "Wohnkomplex", "al": "Kompleksi i Banesave"},
            "description": {
                "en": "Luxury residential development with premium finishes and community amenities.",
                "de": "Luxuriöse Wohnanlage mit Premium-Ausstattung und Gemeinschaftseinrichtungen.",
                "al": "Zhvillim luksoz i banesave me përfundime premium dhe komoditete komunitare.",
            },
            "mainImage": "/assets/banner-1755681398507.jpeg",
            "additionalImages": ["/assets/banner-1755681648070.png"],
        },
    ],
    "service": [
        {
            "title": {
                "en": "Wooden Frame Construction",
                "de": "Holzrahmenbau",
                "al": "Ndërtimi i Kornizave Prej Druri",
            },
            "description": {
                "en": "Professional wooden frame construction for residential and commercial buildings.",
                "de": "Professioneller Holzrahmenbau für Wohn- und Geschäftsgebäude.",
                "al": "Ndërtim profesional i kornizave prej druri për ndërtesa banimi dhe komerciale.",
            },
            "description2": {
                "en": "Our experienced team ensures precision craftsmanship in every project.",
                "de": "Unser erfahrenes Team sorgt in jedem Projekt für präzise Handwerkskunst.",
                "al": "Ekipi ynë me përvojë siguron mjeshtëri të saktë në çdo projekt.",
            },
            "image": "/assets/image1.png",
            "stepImages": [
                {"image": "/assets/step1.png", "titleKey": "planning"},
                {"image": "/assets/step2.png", "titleKey": "construction"},
                {"image": "/assets/step3.png", "titleKey": "completion"},
            ],
        },
        {
            "title": {"en": "Cross-Laminated Timber", "de": "Kreuzlagenholz", "al": "Druri i Laminuar në Kryq"},
            "description": {
                "en": "Cross-laminated timber solutions offering strength, sustainability and design flexibility.",
                "de": "Kreuzlagenholz-Lösungen mit Festigkeit, Nachhaltigkeit und Designflexibilität.",
                "al": "Zgjidhje të drurit të laminuar në kryq me forcë, qëndrueshmëri dhe fleksibilitet.",
            },
            "description2": {
                "en": "Expert consultation and implementation for CLT projects.",
                "de": "Fachkundige Beratung und Umsetzung für CLT-Projekte.",
                "al": "Konsultim dhe implementim ekspert për projektet CLT.",
            },
            "image": "/assets/banner-1755681378587.jpg",
            "stepImages": [
                {"image": "/assets/step1.png", "titleKey": "design"},
                {"image": "/assets/step2.png", "titleKey": "fabrication"},
                {"image": "/assets/step3.png", "titleKey": "installation"},
            ],
        },
    ],
    "social-media": [
        {"platform": "Facebook", "icon": "FaFacebookF", "url": "https://facebook.com", "order": 1},
        {"platform": "Instagram", "icon": "FaInstagram", "url": "https://instagram.com", "order": 2},
        {"platform": "Twitter", "icon": "FaTwitter", "url": "https://twitter.com", "order": 3},
    ],
    "wood": [
        {"title": {"en": "KVH", "de": "KVH", "al": "KVH"}, "imageUrl": "/assets/image (10) (1).png", "order": 1},
        {"title": {"en": "CLT", "de": "CLT", "al": "CLT"}, "imageUrl": "/assets/image (9) (1).png", "order": 2},
        {
            "title": {"en": "Laminated Beams", "de": "Verleimte Balken", "al": "Trarë të Ngjitur"},
            "imageUrl": "/assets/image (7) (1).png",
            "order": 3,
        },
        {
            "title": {"en": "Rockwool", "de": "Steinwolle", "al": "Lesh i Gurit"},
            "imageUrl": "/assets/image (6) (1).png",
            "order": 4,
        },
        {
            "title": {"en": "Fiber Wood", "de": "Faserholz", "al": "Druri i Fibrave"},
            "imageUrl": "/assets/image (5) (1).png",
            "order": 5,
        },
        {"title": {"en": "OSB", "de": "OSB", "al": "OSB"}, "imageUrl": "/assets/image (4) (1).png", "order": 6},
        {
            "title": {"en": "Plywood", "de": "Sperrholz", "al": "Kompensatë"},
            "imageUrl": "/assets/image (3) (1).png",
            "order": 7,
        },
    ],
}
