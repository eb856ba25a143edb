"""
Seed data for the portfolio.

Used by the reset endpoint and by `python -m apps.portfolio.seed`, which
wipes the configured database and reloads this data.
"""
import logging
from datetime import datetime, timezone

from apps.shared.database import SessionLocal, Base, engine

logger = logging.getLogger(__name__)


SEED_PROJECTS = [
    {
        "title": "3D Printer Control System",
        "slug": "3d-printer-control-system",
        "description": "Custom firmware and control interface for a DIY 3D printer",
        "content": """# 3D Printer Control System

A comprehensive control system built from scratch for a custom 3D printer project.

## Overview
This project involved developing both firmware and software components to control a DIY 3D printer build.

## Technical Implementation
- **Firmware**: Written in C++ for Arduino-compatible microcontroller
- **Interface**: React-based web interface for remote control
- **Communication**: WebSocket connection for real-time updates
- **Features**: Temperature monitoring, print progress tracking, emergency stop

## Challenges Solved
- Real-time temperature control algorithms
- Precise motor control for print head positioning
- User-friendly interface for complex operations

## Results
Successfully created a fully functional 3D printer with professional-grade control software.""",
        "category": "HARDWARE",
        "tech_stack": ["C++", "Arduino", "React", "WebSockets"],
        "github_url": "https://github.com/example/3d-printer",
        "demo_url": None,
        "featured": True,
        "created_at": datetime(2024, 1, 15, tzinfo=timezone.utc),
    },
    {
        "title": "Portfolio Website",
        "slug": "portfolio-website",
        "description": "Modern portfolio website with blog-like project showcases",
        "content": """# Portfolio Website

Built with modern web technologies to showcase projects and skills.

## Features
- **Dynamic Content**: Database-driven project management
- **Modern Design**: Clean, responsive interface
- **Blog-like Posts**: Detailed project writeups
- **Performance**: Optimized for speed and SEO

## Technical Stack
- Next.js with App Router
- TypeScript for type safety
- Tailwind CSS for styling
- Prisma for database management
- SQLite for development

## Implementation Details
The site uses server-side rendering for optimal performance and SEO, while incorporating client-side interactivity where needed.""",
        "category": "WEB",
        "tech_stack": ["Next.js", "TypeScript", "Tailwind CSS", "Prisma"],
        "github_url": "https://github.com/example/portfolio",
        "demo_url": "https://portfolio.example.com",
        "featured": True,
        "created_at": datetime(2024, 2, 1, tzinfo=timezone.utc),
    },
    {
        "title": "IoT Sensor Network",
        "slug": "iot-sensor-network",
        "description": "Wireless sensor network for environmental monitoring",
        "content": """# IoT Sensor Network

Distributed system for collecting environmental data using wireless sensors.

## System Architecture
- **Sensors**: ESP32-based nodes with various environmental sensors
- **Communication**: MQTT protocol for data transmission
- **Backend**: Python data processing pipeline
- **Storage**: Time-series database for sensor readings

## Sensor Types
- Temperature and humidity
- Air quality (PM2.5, CO2)
- Light levels
- Soil moisture (for agricultural applications)

## Data Processing
Real-time data analysis with alerting for threshold violations and trend analysis for long-term monitoring.""",
        "category": "HARDWARE",
        "tech_stack": ["C", "ESP32", "MQTT", "Python"],
        "github_url": "https://github.com/example/iot-sensors",
        "demo_url": None,
        "featured": True,
        "created_at": datetime(2024, 3, 1, tzinfo=timezone.utc),
    },
    {
        "title": "Task Management App",
        "slug": "task-management-app",
        "description": "Cross-platform mobile app for project management",
        "content": """# Task Management App

Intuitive mobile application for managing tasks and projects across teams.

## Features
- **Cross-platform**: iOS and Android support
- **Real-time sync**: Instant updates across devices
- **Team collaboration**: Shared projects and assignments
- **Offline support**: Work without internet connection

## Technical Implementation
Built with React Native for cross-platform compatibility, with Firebase providing backend services for authentication, data storage, and real-time synchronization.""",
        "category": "MOBILE",
        "tech_stack": ["React Native", "TypeScript", "Firebase"],
        "github_url": "https://github.com/example/task-app",
        "demo_url": None,
        "featured": False,
        "created_at": datetime(2024, 4, 1, tzinfo=timezone.utc),
    },
]

SEED_SKILLS = [
    # Languages
    {"name": "C", "category": "LANGUAGES", "proficiency": 9},
    {"name": "C++", "category": "LANGUAGES", "proficiency": 8},
    {"name": "Python", "category": "LANGUAGES", "proficiency": 9},
    {"name": "JavaScript", "category": "LANGUAGES", "proficiency": 8},
    {"name": "TypeScript", "category": "LANGUAGES", "proficiency": 8},
    # Frameworks
    {"name": "React", "category": "FRAMEWORKS", "proficiency": 9},
    {"name": "Next.js", "category": "FRAMEWORKS", "proficiency": 8},
    # Tools
    {"name": "AWS", "category": "TOOLS", "proficiency": 7},
    {"name": "Git", "category": "TOOLS", "proficiency": 9},
    # Databases
    {"name": "MySQL", "category": "DATABASES", "proficiency": 7},
    {"name": "SQLite", "category": "DATABASES", "proficiency": 8},
]


def seed_database():
    """
    Wipe projects and skills and reload the seed data.
    """
    from apps.portfolio.repository import reset_portfolio

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        logger.info("Seeding database...")
        projects_count, skills_count = reset_portfolio(db)
        logger.info(f"Seeded {projects_count} projects and {skills_count} skills")
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed_database()
