# gpustore/services/seed_data.py
"""
Demo catalog loaded by the admin "seed" action.
"""

MANUFACTURERS: list[str] = [
    "NVIDIA",
    "AMD",
    "ASUS",
    "MSI",
    "Gigabyte",
    "EVGA",
    "Sapphire",
    "Zotac",
    "Palit",
    "PowerColor",
]

TECHNOLOGIES: list[str] = [
    "Ray Tracing",
    "DLSS 3.0",
    "FSR 3.1",
    "G-Sync",
    "FreeSync",
    "Reflex",
    "Anti-Lag+",
    "Resizable BAR",
    "VRS",
    "CUDA",
]

# (model name, price, manufacturer name, description, image filename)
VIDEO_CARDS: list[tuple[str, float, str, str, str]] = [
    (
        "GeForce RTX 4090",
        3800.00,
        "NVIDIA",
        "The undisputed Ada Lovelace flagship for 4K gaming and rendering.",
        "4090.jpg",
    ),
    (
        "Radeon RX 7900 XTX",
        2200.00,
        "AMD",
        "AMD's most powerful RDNA 3 card with a chiplet design and 24GB VRAM.",
        "7900xtx.jpg",
    ),
    (
        "ROG Strix RTX 4080 Super",
        2600.00,
        "ASUS",
        "Premium ASUS build with massive cooling and factory overclock.",
        "4080s.jpg",
    ),
    (
        "GeForce RTX 4070 Ti",
        1800.00,
        "NVIDIA",
        "The sweet spot for ultra settings at 1440p.",
        "4070ti.jpg",
    ),
    (
        "Radeon RX 7800 XT",
        1100.00,
        "AMD",
        "Mid-range king with 16GB VRAM for the price.",
        "7800xt.jpg",
    ),
    (
        "GeForce RTX 4060",
        650.00,
        "NVIDIA",
        "Efficient 1080p card with low power draw.",
        "4060.jpg",
    ),
    (
        "Radeon RX 7600",
        580.00,
        "AMD",
        "Affordable and reliable for popular esports titles.",
        "7600.jpg",
    ),
    (
        "MSI Ventus RTX 3060",
        600.00,
        "NVIDIA",
        "A classic that stays relevant thanks to its 12GB of VRAM.",
        "3060.jpg",
    ),
    (
        "Sapphire Pulse RX 6700 XT",
        750.00,
        "AMD",
        "Proven mid-range card from a long-time AMD partner.",
        "6700xt.jpg",
    ),
    (
        "GTX 1650 Super",
        300.00,
        "NVIDIA",
        "Time-tested upgrade for older office PCs, no extra power connector.",
        "1650.jpg",
    ),
]


def technologies_for_model(model_name: str) -> list[str]:
    """
    Technology names a demo card gets linked to.

    RTX cards get Ray Tracing and DLSS, Radeon cards get FSR,
    and every card supports Resizable BAR.
    """
    names: list[str] = []
    if "RTX" in model_name:
        names += ["Ray Tracing", "DLSS 3.0"]
    if "Radeon" in model_name:
        names.append("FSR 3.1")
    names.append("Resizable BAR")
    return names
