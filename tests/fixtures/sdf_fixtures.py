"""
SDF test fixtures for the test suite.

Contains SDF document samples for testing the SDF parser, the
SDF -> DTDL converter, the linter and the composer.
"""

# =============================================================================
# sdfObject documents
# =============================================================================

SDF_OBJECT_DOCUMENT = {
    "info": {
        "title": "Example file for OneDM Semantic Definition Format",
        "version": "2019-04-24",
        "copyright": "Copyright 2019 Example Corp. All rights reserved.",
        "license": "https://example.com/license"
    },
    "namespace": {
        "cap": "https://example.com/capability/cap"
    },
    "defaultNamespace": "cap",
    "sdfObject": {
        "Switch": {
            "label": "Switch",
            "description": "A binary switch",
            "sdfProperty": {
                "value": {
                    "description": "The state of the switch; false for off and true for on.",
                    "type": "boolean"
                },
                "brightness": {
                    "type": "integer",
                    "unit": "%",
                    "writable": False
                }
            },
            "sdfAction": {
                "on": {
                    "description": "Turn the switch on; equivalent to setting value to true."
                },
                "setLevel": {
                    "sdfInputData": ["#/sdfData/level"],
                    "sdfOutputData": ["#/sdfData/accepted", "#/sdfData/appliedLevel"]
                }
            },
            "sdfEvent": {
                "overheated": {
                    "type": "number",
                    "unit": "Cel",
                    "description": "Temperature that triggered the protection"
                }
            },
            "sdfData": {
                "level": {"type": "integer", "description": "Requested level"},
                "accepted": {"type": "boolean"},
                "appliedLevel": {"type": "integer"}
            }
        }
    }
}

SDF_CHOICE_DOCUMENT = {
    "info": {"title": "Choice", "version": "1", "copyright": "", "license": ""},
    "sdfObject": {
        "Fan": {
            "sdfProperty": {
                "speed": {
                    "type": "string",
                    "sdfChoice": {
                        "low": {},
                        "high": {"description": "Maximum air flow"}
                    }
                },
                "state": {
                    "type": "string",
                    "enum": ["on", "off"]
                }
            }
        }
    }
}

SDF_INTEGER_CHOICE_DOCUMENT = {
    "info": {"title": "Dimmer", "version": "1", "copyright": "", "license": ""},
    "sdfObject": {
        "Dimmer": {
            "sdfProperty": {
                "level": {
                    "type": "integer",
                    "sdfChoice": {"1": {}, "2": {"description": "Second level"}}
                }
            }
        }
    }
}

SDF_WITH_UNKNOWN_UNIT = {
    "info": {"title": "Units", "version": "1", "copyright": "", "license": ""},
    "sdfObject": {
        "Meter": {
            "sdfProperty": {
                "distance": {"type": "number", "unit": "furlong"},
                "temperature": {"type": "number", "unit": "Cel"}
            }
        }
    }
}

SDF_WITH_RELATIONS = {
    "info": {"title": "Relations", "version": "1", "copyright": "", "license": ""},
    "namespace": {
        "example": "https://onedm.example.com/dtmi/com/example",
        "terms": "https://example.com/relations-terms"
    },
    "defaultNamespace": "example",
    "sdfObject": {
        "Building": {
            "sdfRelation": {
                "hasThermostat": {
                    "relationType": "terms:relatedTo",
                    "target": "#/sdfObject/Thermostat"
                }
            }
        },
        "SmartThermostat": {
            "sdfRef": ["#/sdfObject/Thermostat", "#/sdfObject/Hygrometer"]
        }
    }
}

# =============================================================================
# sdfThing documents
# =============================================================================

SDF_THING_DOCUMENT = {
    "info": {"title": "Controller", "version": "1", "copyright": "", "license": ""},
    "sdfThing": {
        "Controller": {
            "label": "Room controller",
            "description": "Controls the climate of one room",
            "sdfProperty": {
                "mode": {"type": "string"}
            },
            "sdfObject": {
                "Switch": {
                    "sdfProperty": {"value": {"type": "boolean"}}
                },
                "Thermostat": {
                    "sdfEvent": {"temperature": {"type": "number", "unit": "Cel"}}
                }
            },
            "sdfThing": {
                "Sensors": {
                    "sdfObject": {
                        "Hygrometer": {
                            "sdfProperty": {"humidity": {"type": "number", "unit": "%RH"}}
                        }
                    }
                }
            }
        }
    }
}

THING_SKELETON = {
    "info": {
        "title": "Controller",
        "version": "2022-01-01",
        "copyright": "Copyright 2022",
        "license": "BSD-3-Clause"
    },
    "namespace": {"cap": "https://example.com/capability/cap"},
    "defaultNamespace": "cap"
}
