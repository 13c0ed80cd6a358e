"""
components/seed_data.py: Demo hierarchy for a general cargo ship.

Each node is built with node(); children nest under their parent and the
seeder inserts them depth-first so parents always exist first.
"""


def node(sfi_code, name, type="component", children=(), **fields):
    return {"sfi_code": sfi_code, "name": name, "type": type, "children": list(children), **fields}


def system(sfi_code, name, children=(), **fields):
    return node(sfi_code, name, "system", children, **fields)


CARGO_SHIP = [
    system("1", "Ship General", [
        system("10", "General Ship Design", [
            node("100", "Design Drawings", "document"),
            node("101", "Stability Documentation", "document"),
        ]),
        system("11", "Tests & Trials", [
            node("110", "Sea Trial Documentation", "document"),
            node("111", "Test Reports", "document"),
        ]),
    ]),
    system("2", "Hull", [
        system("20", "Hull Structure", [
            node("200", "Hull Shell Plating"),
            node("201", "Hull Framing"),
            node("202", "Bulkheads"),
        ]),
        system("21", "Hull Outfitting", [
            node("210", "Hatches"),
            node("211", "Access Doors"),
            node("212", "Manholes"),
        ]),
    ]),
    system("3", "Equipment for Cargo", [
        system("30", "Cargo Handling Systems", [
            node("300", "Cargo Cranes", manufacturer="Marine Cranes Ltd", model="CL-5000",
                 technical_specs="5T max capacity", children=[
                     node("3001", "Crane Hydraulic System"),
                     node("3002", "Crane Control System"),
                     node("3003", "Crane Wire Ropes"),
                 ]),
            node("301", "Cargo Winches", manufacturer="Winch Systems Corp", model="CW-2000",
                 running_hours=3240),
        ]),
        system("31", "Cargo Holds", [
            node("310", "Hold #1", "space"),
            node("311", "Hold #2", "space"),
            node("312", "Hold #3", "space"),
        ]),
        system("32", "Cargo Refrigeration", [
            node("320", "Reefer Control System", manufacturer="CoolTech Marine", model="RC-500"),
            node("321", "Refrigeration Compressors", manufacturer="CoolTech Marine", model="CP-100",
                 running_hours=4100, children=[
                     node("3211", "Compressor #1", running_hours=4200),
                     node("3212", "Compressor #2", running_hours=4050),
                 ]),
        ]),
    ]),
    system("4", "Ship Equipment", [
        system("40", "Manoeuvring Equipment", [
            node("400", "Rudder System", manufacturer="Marine Steering Ltd", running_hours=4500),
            node("401", "Bow Thruster", manufacturer="Thruster Tech", model="BT-250", running_hours=2200),
        ]),
        system("41", "Navigation Equipment", [
            node("410", "Radar System"),
            node("411", "GPS System"),
            node("412", "ECDIS"),
        ]),
    ]),
    system("6", "Machinery Main Components", [
        system("60", "Main Engine", [
            node("600", "Main Diesel Engine", manufacturer="Marine Power Inc", model="ME-2000",
                 running_hours=4382, criticality="high", children=[
                     node("6001", "Crankshaft Assembly", criticality="high", children=[
                         node("60011", "Main Bearings"),
                         node("60012", "Connecting Rods"),
                     ]),
                     node("6002", "Cylinder Head Assembly", criticality="high", children=[
                         node("60021", "Intake Valves"),
                         node("60022", "Exhaust Valves"),
                         node("60023", "Valve Springs"),
                     ]),
                     node("6003", "Fuel Injection System", criticality="high", children=[
                         node("60031", "Fuel Pumps"),
                         node("60032", "Fuel Injectors"),
                         node("60033", "Fuel Lines"),
                     ]),
                 ]),
        ]),
        system("62", "Gearbox", [
            node("620", "Main Reduction Gear", manufacturer="Marine Transmission Ltd", model="MRG-500",
                 running_hours=4382, criticality="high"),
        ]),
        system("63", "Propeller System", [
            node("630", "Propeller Shaft", manufacturer="Marine Propulsion Inc", criticality="high"),
            node("631", "Propeller", manufacturer="Marine Propulsion Inc", model="PP-4B", criticality="high"),
            node("632", "Shaft Seals", criticality="high"),
        ]),
    ]),
    system("7", "Systems for Machinery Main Components", [
        system("70", "Fuel Oil System", [
            node("700", "Fuel Tanks"),
            node("701", "Fuel Treatment System", children=[
                node("7011", "Fuel Purifier", running_hours=3500),
                node("7012", "Fuel Filters"),
            ]),
            node("702", "Fuel Transfer Pumps", manufacturer="Pump Systems Inc", model="FTP-100",
                 running_hours=3200),
        ]),
        system("71", "Lube Oil System", [
            node("710", "Lube Oil Tanks"),
            node("711", "Lube Oil Purifier", manufacturer="Marine Separator Ltd", model="LOP-200",
                 running_hours=3800),
            node("712", "Lube Oil Cooler"),
        ]),
        system("72", "Cooling System", [
            node("720", "Sea Water Cooling", children=[
                node("7201", "Sea Water Pumps", running_hours=4100),
                node("7202", "Heat Exchangers"),
            ]),
            node("721", "Fresh Water Cooling", children=[
                node("7211", "Fresh Water Pumps", running_hours=4150),
                node("7212", "Expansion Tank"),
            ]),
        ]),
    ]),
    system("8", "Ship Common Systems", [
        system("80", "Ballast & Bilge System", [
            node("800", "Ballast System", children=[
                node("8001", "Ballast Pumps", running_hours=2500),
                node("8002", "Ballast Valves"),
            ]),
            node("801", "Bilge System", children=[
                node("8011", "Bilge Pumps", running_hours=1800),
                node("8012", "Bilge Separators", running_hours=1500),
            ]),
        ]),
        system("81", "Fire & Deck Wash System", [
            node("810", "Fire Fighting System", criticality="high", children=[
                node("8101", "Fire Pumps", criticality="high"),
            ]),
        ]),
    ]),
]

# (sfi_code, name, description, interval_hours, hours since last done, hours until due)
DEMO_TASKS = [
    ("600", "100-hours maintenance", "General check of all engine systems.", 100, 82, 18),
    ("600", "Change engine oil", "Replace engine oil and oil filter.", 200, 182, 18),
    ("600", "Check crankshaft alignment", "Verify alignment of crankshaft and connecting rods.", 1000, 382, 618),
    ("600", "Replace fuel filters", "Replace primary and secondary fuel filters.", 500, 382, 118),
    ("600", "Check cooling system", "Inspect coolant levels, hoses, and water pump.", 200, 282, -82),
    ("631", "Propeller inspection", "Visual inspection of propeller blades for damage and fouling.", 2000, 1500, 500),
    ("720", "Clean heat exchangers", "Disassemble and clean sea water side of heat exchangers.", 4000, 3500, 500),
]
